from __future__ import annotations

import os
import re
from dataclasses import dataclass, field


_HEX_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

DEFAULT_RPC_URL = "https://rpc-amoy.polygon.technology"
DEFAULT_CONTRACT_ADDRESS = "0x0000000000000000000000000000000000000000"


def _env(name: str, default: str) -> str:
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: str) -> int:
    raw = _env(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"invalid_env:{name}") from exc


def _env_float(name: str, default: str) -> float:
    raw = _env(name, default)
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"invalid_env:{name}") from exc


@dataclass(frozen=True)
class GroupProofConfig:
    rpc_url: str = DEFAULT_RPC_URL
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    cache_ttl_seconds: int = 60
    rpc_timeout_seconds: float = 20.0
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    slow_request_ms: float = 1500.0
    rate_limit_window_ms: int = 900_000
    rate_limit_max: int = 100

    @classmethod
    def from_env(cls) -> GroupProofConfig:
        contract_address = _env("CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS)
        if not _HEX_ADDRESS_RE.fullmatch(contract_address):
            raise ValueError("invalid_env:CONTRACT_ADDRESS")

        cache_ttl_seconds = _env_int("CACHE_TTL", "60")
        if cache_ttl_seconds < 0:
            raise ValueError("invalid_env:CACHE_TTL")

        rpc_timeout_seconds = _env_float("RPC_TIMEOUT_SECONDS", "20")
        if rpc_timeout_seconds <= 0:
            raise ValueError("invalid_env:RPC_TIMEOUT_SECONDS")

        rate_limit_window_ms = _env_int("RATE_LIMIT_WINDOW_MS", "900000")
        if rate_limit_window_ms <= 0:
            raise ValueError("invalid_env:RATE_LIMIT_WINDOW_MS")

        rate_limit_max = _env_int("RATE_LIMIT_MAX", "100")
        if rate_limit_max < 1:
            raise ValueError("invalid_env:RATE_LIMIT_MAX")

        origins = [origin.strip() for origin in _env("ALLOWED_ORIGINS", "*").split(",") if origin.strip()]

        return cls(
            rpc_url=_env("RPC_URL", DEFAULT_RPC_URL),
            contract_address=contract_address,
            cache_ttl_seconds=cache_ttl_seconds,
            rpc_timeout_seconds=rpc_timeout_seconds,
            allowed_origins=origins or ["*"],
            slow_request_ms=max(25.0, _env_float("API_SLOW_REQUEST_MS", "1500")),
            rate_limit_window_ms=rate_limit_window_ms,
            rate_limit_max=rate_limit_max,
        )
