# etl/utils/api_clients.py
import asyncio
import json
import time
from pathlib import Path
from typing import Optional

import aiofiles
import aiohttp
import requests

from app.errors import ParseError, ResourceFetchError


def is_remote(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


class AsyncFetcher:
    """
    Fetch overlay resources without blocking the event loop.

    http(s) URLs go through one shared aiohttp session, anything else is read
    from disk with aiofiles. Failures raise ResourceFetchError / ParseError;
    there are no retries, a new selection is the only recovery.
    """
    def __init__(self, timeout: int = 10):
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None
        self.calls = []

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def fetch_bytes(self, url: str) -> bytes:
        self.calls.append(url)
        if not is_remote(url):
            try:
                async with aiofiles.open(url, "rb") as f:
                    return await f.read()
            except OSError as e:
                raise ResourceFetchError(f"Failed to read {url}: {e}", url=url) from e

        try:
            async with self.session.get(url) as resp:
                body = await resp.read()
                if resp.status < 200 or resp.status >= 300:
                    raise ResourceFetchError(f"Failed to fetch {url}: {resp.status} {resp.reason}", url=url)
                return body
        except asyncio.CancelledError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ResourceFetchError(f"Failed to fetch {url}: {e}", url=url) from e

    async def fetch_text(self, url: str) -> str:
        body = await self.fetch_bytes(url)
        try:
            return body.decode("utf8")
        except UnicodeDecodeError as e:
            raise ParseError(f"{url} is not valid UTF-8 text: {e}", url=url) from e

    async def fetch_json(self, url: str) -> dict:
        text = await self.fetch_text(url)
        try:
            return json.loads(text)
        except ValueError as e:
            raise ParseError(f"Malformed JSON in {url}: {e}", url=url) from e


class SimpleRequestClient:
    """
    Very small blocking wrapper with retry and basic backoff.
    Used by the standalone TIFF viewer, which downloads the whole file.
    """
    def __init__(self, retries=3, backoff=1.0, timeout=30):
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout
        self.session = requests.Session()

    def get_bytes(self, url, params=None, headers=None) -> bytes:
        if not is_remote(url):
            try:
                return Path(url).read_bytes()
            except OSError as e:
                raise ResourceFetchError(f"Failed to read {url}: {e}", url=url) from e

        for attempt in range(1, self.retries + 1):
            try:
                r = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
                r.raise_for_status()
                return r.content
            except requests.RequestException as e:
                if attempt == self.retries:
                    raise ResourceFetchError(f"Failed to fetch {url}: {e}", url=url) from e
                time.sleep(self.backoff * attempt)
