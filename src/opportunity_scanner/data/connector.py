"""Market data provider interface and shared HTTP plumbing."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import asyncio
import logging

import aiohttp
import numpy as np

from ..core.enums import CandidateSource
from ..core.models import Candidate

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """A single request to a market data provider failed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def to_float(value: Any, default: float = 0.0) -> float:
    """Coerce a provider number (number, numeric string, null) to a finite float."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if not np.isfinite(result):
        return default
    return result


def to_non_negative(value: Any) -> float:
    """Coerce like :func:`to_float` and floor at zero."""
    return max(0.0, to_float(value))


def nested(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class ProviderClient:
    """Read-only JSON client for one provider. Single attempt, no retries."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={'Accept': 'application/json'},
            )
        return self._session

    async def get_json(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET ``base_url + path`` and decode the JSON body."""
        url = f"{self.base_url}{path}"
        session = await self._get_session()
        try:
            async with session.get(url, params=params) as response:
                if response.status != 200:
                    raise ProviderError(url, f"HTTP {response.status}")
                return await response.json(content_type=None)
        except ProviderError:
            raise
        except asyncio.TimeoutError:
            raise ProviderError(url, f"timed out after {self.timeout}s")
        except aiohttp.ClientError as e:
            raise ProviderError(url, f"request failed: {e}")
        except ValueError as e:
            raise ProviderError(url, f"invalid JSON: {e}")

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()


@dataclass
class AdapterOutcome:
    """Best-effort result of one adapter call: whatever parsed, plus what failed."""

    source: CandidateSource
    candidates: List[Candidate] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def record_error(self, message: str):
        logger.warning(f"[{self.source.value}] {message}")
        self.errors.append(message)


class SourceAdapter(ABC):
    """Maps one provider's raw listings into scored candidates."""

    source: CandidateSource

    def __init__(self, client: ProviderClient, config: Optional[Dict] = None):
        self.client = client
        self.config = config or {}

    @abstractmethod
    async def fetch(self, chain: str, limit: int) -> AdapterOutcome:
        """Fetch up to *limit* candidates for *chain*. Must not raise."""
        pass

    async def close(self):
        await self.client.close()
