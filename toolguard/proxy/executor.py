#!/usr/bin/env python3
"""
Guarded Executor — validated file, command and fetch operations.

Tool handlers call these instead of touching the filesystem, spawning a
process, or issuing an HTTP request directly. Every operation runs the
matching guard first; a GuardError from the guard propagates unchanged and
the operation is never attempted.
"""

import os
import time
import shlex
import logging
import subprocess
from typing import List, Optional
from urllib.parse import urljoin

import requests

from toolguard.core.types import CommandResult, FetchResult, ValidationError
from toolguard.core.config import GuardConfig
from toolguard.core.constants import SAFE_ENV_VARS, MAX_FETCH_BYTES, MAX_REDIRECTS
from toolguard.core.validator import DefaultValidator
from toolguard.core.access.command_validator import command_base_name

__all__ = ['GuardedExecutor']

logger = logging.getLogger("toolguard.proxy.executor")

_REDIRECT_CODES = (301, 302, 303, 307, 308)
_TRUNCATED = "\n... [truncated]"


class GuardedExecutor:
    """Runs file, command and fetch operations behind a shared validator."""

    def __init__(self, validator: DefaultValidator, config: Optional[GuardConfig] = None,
                 session: Optional[requests.Session] = None):
        self.validator = validator
        self.config = config or GuardConfig()
        self.session = session or requests.Session()

    def _truncate(self, text: str) -> str:
        limit = self.config.max_output_length
        if len(text) > limit:
            return text[:limit] + _TRUNCATED
        return text

    # ---- Files ----

    def read_file(self, path: str) -> str:
        clean = self.validator.sanitize_path(path)

        if not os.path.isfile(clean):
            raise FileNotFoundError(f"Not a file: {clean}")

        size_mb = os.path.getsize(clean) / (1024 * 1024)
        if size_mb > self.config.max_file_size_mb:
            raise ValueError(f"File too large: {size_mb:.1f}MB")

        with open(clean, 'r', encoding='utf-8', errors='replace') as f:
            content = f.read()
        logger.debug(f"FILE_READ {clean} ({len(content)} chars)")
        return self._truncate(content)

    def write_file(self, path: str, content: str) -> str:
        clean = self.validator.sanitize_path(path)
        os.makedirs(os.path.dirname(clean), exist_ok=True)
        with open(clean, 'w', encoding='utf-8') as f:
            f.write(content)
        logger.debug(f"FILE_WRITE {clean} ({len(content)} chars)")
        return clean

    def list_dir(self, path: str) -> List[str]:
        clean = self.validator.sanitize_path(path)
        return sorted(os.listdir(clean))

    # ---- Commands ----

    def run_command(self, command: str, cwd: Optional[str] = None) -> CommandResult:
        """Validate then run a command without a shell.

        The line is split with shlex and executed directly, so the shell
        metacharacters the command guard does not inspect are passed as
        literal arguments rather than interpreted.

        The guard sees the command re-joined from the split arguments, so
        quoting cannot hide the executable that is actually started.
        """
        try:
            args = shlex.split(command)
        except ValueError as e:
            raise ValidationError("invalid command format", str(e)) from e

        exe = self.validator.command_validator.validate(shlex.join(args))
        if exe != command_base_name(args[0]):
            raise ValidationError(
                "invalid command format",
                "executable name must not need shell quoting",
            )
        if cwd is not None:
            cwd = self.validator.sanitize_path(cwd)

        safe_env = {k: os.environ[k] for k in SAFE_ENV_VARS if k in os.environ}

        start = time.monotonic()
        proc = subprocess.run(
            args,
            shell=False,
            capture_output=True,
            text=True,
            timeout=self.config.command_timeout,
            env=safe_env,
            cwd=cwd,
        )
        duration = time.monotonic() - start

        logger.info(f"COMMAND: {args[0]} | exit {proc.returncode}")
        return CommandResult(
            stdout=self._truncate(proc.stdout or ""),
            stderr=self._truncate(proc.stderr or ""),
            exit_code=proc.returncode,
            duration=duration,
        )

    # ---- Network ----

    def fetch_url(self, url: str) -> FetchResult:
        """Validate then GET a URL, re-validating every redirect hop."""
        current = url
        for _ in range(MAX_REDIRECTS + 1):
            self.validator.validate_url(current)
            resp = self.session.get(
                current,
                timeout=self.config.fetch_timeout,
                allow_redirects=False,
                stream=True,
            )
            try:
                location = resp.headers.get('Location')
                if resp.status_code in _REDIRECT_CODES and location:
                    current = urljoin(current, location)
                    continue
                return self._read_response(current, resp)
            finally:
                resp.close()

        raise requests.TooManyRedirects(f"Exceeded {MAX_REDIRECTS} redirects fetching {url}")

    def _read_response(self, url: str, resp: requests.Response) -> FetchResult:
        body = b""
        truncated = False
        for chunk in resp.iter_content(chunk_size=8192):
            body += chunk
            if len(body) > MAX_FETCH_BYTES:
                body = body[:MAX_FETCH_BYTES]
                truncated = True
                break

        try:
            text = body.decode(resp.encoding or 'utf-8', errors='replace')
        except LookupError:
            text = body.decode('utf-8', errors='replace')
        logger.info(f"FETCH: {url} | {resp.status_code}")
        return FetchResult(
            url=url,
            status_code=resp.status_code,
            content_type=resp.headers.get('Content-Type', ''),
            text=text,
            truncated=truncated,
        )
