"""View-function ABI of the GroupProof registry contract.

Only read-only functions are listed; this service never submits transactions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_abi import decode, encode
from eth_utils import keccak

PROJECT_FIELDS: tuple[str, ...] = (
    "name",
    "description",
    "owner",
    "createdAt",
    "isActive",
    "contributorCount",
    "commitCount",
)

COMMIT_FIELDS: tuple[str, ...] = (
    "commitHash",
    "author",
    "authorName",
    "authorEmail",
    "timestamp",
    "gitTimestamp",
    "message",
    "filesChanged",
    "additions",
    "deletions",
    "repoName",
    "branch",
)

CONTRIBUTOR_STATS_FIELDS: tuple[str, ...] = (
    "totalCommits",
    "totalAdditions",
    "totalDeletions",
    "totalFilesChanged",
    "firstContribution",
    "lastContribution",
)

_COMMIT_TUPLE = "(bytes32,address,string,string,uint256,uint256,string,uint16,uint32,uint32,string,string)"
_CONTRIBUTOR_STATS_TUPLE = "(uint256,uint256,uint256,uint256,uint256,uint256)"


@dataclass(frozen=True)
class ContractFunction:
    name: str
    inputs: tuple[str, ...]
    outputs: tuple[str, ...]
    # Component names when the single output is a struct (or array of structs).
    struct_fields: tuple[str, ...] | None = None

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak(text=self.signature)[:4]

    def encode_call(self, *args: Any) -> str:
        if len(args) != len(self.inputs):
            raise TypeError(f"{self.name} expects {len(self.inputs)} arguments, got {len(args)}")
        return "0x" + (self.selector + encode(list(self.inputs), list(args))).hex()

    def decode_result(self, data: bytes) -> Any:
        """Decode return data.

        A single output is unwrapped. Struct outputs come back as dicts keyed by
        component name; multiple return values stay a positional tuple.
        """
        values = decode(list(self.outputs), data)
        if len(values) != 1:
            return tuple(values)
        value = values[0]
        if self.struct_fields is None:
            return value
        if self.outputs[0].endswith("[]"):
            return [dict(zip(self.struct_fields, item)) for item in value]
        return dict(zip(self.struct_fields, value))


GET_TOTAL_PROJECTS = ContractFunction("getTotalProjects", (), ("uint256",))
GET_ALL_PROJECTS = ContractFunction("getAllProjects", ("uint256", "uint256"), ("bytes32[]",))
GET_PROJECT = ContractFunction(
    "getProject",
    ("bytes32",),
    ("string", "string", "address", "uint256", "bool", "uint256", "uint256"),
)
GET_COMMITS = ContractFunction(
    "getCommits",
    ("bytes32", "uint256", "uint256"),
    (f"{_COMMIT_TUPLE}[]",),
    struct_fields=COMMIT_FIELDS,
)
GET_COMMIT_COUNT = ContractFunction("getCommitCount", ("bytes32",), ("uint256",))
GET_CONTRIBUTORS = ContractFunction("getContributors", ("bytes32",), ("address[]",))
GET_CONTRIBUTOR_STATS = ContractFunction(
    "getContributorStats",
    ("bytes32", "address"),
    (_CONTRIBUTOR_STATS_TUPLE,),
    struct_fields=CONTRIBUTOR_STATS_FIELDS,
)
GET_USER_PROJECTS = ContractFunction("getUserProjects", ("address",), ("bytes32[]",))
IS_COMMIT_RECORDED = ContractFunction("isCommitRecorded", ("bytes32", "bytes32"), ("bool",))
