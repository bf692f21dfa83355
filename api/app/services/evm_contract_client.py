from __future__ import annotations

import logging
from typing import Any

import httpx
from eth_utils import to_checksum_address

from app.services import contract_abi
from app.services.contract_abi import ContractFunction

log = logging.getLogger(__name__)


class ContractCallError(RuntimeError):
    pass


def _bytes32(value: str) -> bytes:
    raw = value[2:] if value.startswith("0x") else value
    return bytes.fromhex(raw)


def _hex32(value: bytes) -> str:
    return f"0x{value.hex()}"


class EvmContractClient:
    """Read-only access to the registry contract through ``eth_call`` over JSON-RPC."""

    def __init__(self, rpc_url: str, contract_address: str, timeout: float = 20.0) -> None:
        self._rpc_url = rpc_url
        self._contract_address = to_checksum_address(contract_address)
        self._timeout = timeout

    @property
    def contract_address(self) -> str:
        return self._contract_address

    async def get_total_projects(self) -> int:
        return await self._call(contract_abi.GET_TOTAL_PROJECTS)

    async def get_all_projects(self, offset: int, limit: int) -> list[str]:
        ids = await self._call(contract_abi.GET_ALL_PROJECTS, offset, limit)
        return [_hex32(value) for value in ids]

    async def get_project(self, project_id: str) -> tuple[Any, ...]:
        return await self._call(contract_abi.GET_PROJECT, _bytes32(project_id))

    async def get_commits(self, project_id: str, offset: int, limit: int) -> list[dict[str, Any]]:
        return await self._call(contract_abi.GET_COMMITS, _bytes32(project_id), offset, limit)

    async def get_commit_count(self, project_id: str) -> int:
        return await self._call(contract_abi.GET_COMMIT_COUNT, _bytes32(project_id))

    async def get_contributors(self, project_id: str) -> list[str]:
        addresses = await self._call(contract_abi.GET_CONTRIBUTORS, _bytes32(project_id))
        return [to_checksum_address(address) for address in addresses]

    async def get_contributor_stats(self, project_id: str, address: str) -> dict[str, int]:
        return await self._call(
            contract_abi.GET_CONTRIBUTOR_STATS,
            _bytes32(project_id),
            to_checksum_address(address),
        )

    async def get_user_projects(self, address: str) -> list[str]:
        ids = await self._call(contract_abi.GET_USER_PROJECTS, to_checksum_address(address))
        return [_hex32(value) for value in ids]

    async def is_commit_recorded(self, project_id: str, commit_hash: str) -> bool:
        return await self._call(contract_abi.IS_COMMIT_RECORDED, _bytes32(project_id), _bytes32(commit_hash))

    async def _call(self, function: ContractFunction, *args: Any) -> Any:
        data = function.encode_call(*args)
        result = await self._rpc("eth_call", [{"to": self._contract_address, "data": data}, "latest"])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise ContractCallError("evm_rpc_invalid_result")
        try:
            payload = bytes.fromhex(result[2:])
        except ValueError as exc:
            raise ContractCallError("evm_rpc_invalid_result") from exc
        return function.decode_result(payload)

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        log.debug("evm_rpc method=%s url=%s", method, self._rpc_url)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(self._rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()

        if not isinstance(body, dict):
            raise ContractCallError("evm_rpc_invalid_response")
        if body.get("error") is not None:
            code = body["error"].get("code") if isinstance(body["error"], dict) else "unknown"
            raise ContractCallError(f"evm_rpc_error:{code}")
        return body.get("result")
