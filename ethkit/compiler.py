"""Runs the solidity compiler and downloads compiler binaries."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import tempfile
import urllib.request
from dataclasses import dataclass, field
from typing import Any

COMBINED_OUTPUTS = "bin,bin-runtime,srcmap-runtime,abi,srcmap,ast"
_DOWNLOAD_URL = "https://github.com/ethereum/solidity/releases/download/v{version}/solc-static-linux"


def _field(data: dict, name: str, default: Any = None) -> Any:
    if name in data:
        return data[name]
    lowered = name.lower()
    for key, value in data.items():
        if key.lower() == lowered:
            return value
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


@dataclass
class Artifact:
    abi: str = ""
    bin: str = ""
    bin_runtime: str = ""
    src_map: str = ""
    src_map_runtime: str = ""


@dataclass
class Source:
    ast: dict[str, Any] | None = None


def _artifact(data: Any) -> Artifact:
    if not isinstance(data, dict):
        raise ValueError("contract entry must be a JSON object")
    return Artifact(
        abi=_text(_field(data, "abi")),
        bin=_text(_field(data, "bin")),
        bin_runtime=_text(_field(data, "bin-runtime")),
        src_map=_text(_field(data, "srcmap")),
        src_map_runtime=_text(_field(data, "srcmap-runtime")),
    )


def _source(data: Any) -> Source:
    if not isinstance(data, dict):
        raise ValueError("source entry must be a JSON object")
    return Source(ast=_field(data, "ast"))


@dataclass
class Output:
    contracts: dict[str, Artifact] = field(default_factory=dict)
    sources: dict[str, Source] = field(default_factory=dict)
    version: str = ""

    @classmethod
    def from_json(cls, data: dict | str | bytes) -> Output:
        """Build the output from solc's ``--combined-json`` document."""
        if not isinstance(data, dict):
            data = json.loads(data)
        if not isinstance(data, dict):
            raise ValueError("compiler output must be a JSON object")
        contracts = _field(data, "contracts") or {}
        sources = _field(data, "sources") or {}
        return cls(
            contracts={name: _artifact(entry) for name, entry in contracts.items()},
            sources={name: _source(entry) for name, entry in sources.items()},
            version=_field(data, "version", "") or "",
        )


class Solidity:
    """The solidity compiler at ``path``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def compile_code(self, code: str) -> Output:
        """Compile solidity source given as text."""
        if not code:
            raise ValueError("code is empty")
        return self._compile(code, ())

    def compile(self, *args: str) -> Output:
        """Compile the given source files."""
        if not args:
            raise ValueError("no input files")
        return self._compile("", args)

    def _compile(self, code: str, files: tuple[str, ...]) -> Output:
        command = [self.path, "--combined-json", COMBINED_OUTPUTS]
        if code:
            command.append("-")
        command.extend(files)
        try:
            completed = subprocess.run(
                command,
                input=code.encode("utf-8") if code else None,
                stdin=None if code else subprocess.DEVNULL,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise RuntimeError(f"failed to compile: {exc}") from exc
        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            raise RuntimeError(f"failed to compile: {stderr}")
        return Output.from_json(completed.stdout)


def download_solidity(version: str, dst: str | os.PathLike, rename_dst: bool) -> None:
    """Download the static linux solc binary into ``dst``.

    The binary is named ``solidity``, or ``solidity-<version>`` if ``rename_dst``.
    """
    url = _DOWNLOAD_URL.format(version=version)
    dst = os.fspath(dst)

    if os.path.exists(dst):
        if not os.path.isdir(dst):
            raise FileExistsError("dst is a file")
    else:
        try:
            os.makedirs(dst, mode=0o755, exist_ok=True)
        except OSError as exc:
            raise OSError(f"cannot create dst path: {exc}") from exc

    name = f"solidity-{version}" if rename_dst else "solidity"

    with tempfile.TemporaryDirectory(prefix="solc-") as tmp_dir:
        path = os.path.join(tmp_dir, name)
        with urllib.request.urlopen(url) as response, open(path, "wb") as out:
            shutil.copyfileobj(response, out)
        os.chmod(path, 0o755)
        shutil.move(path, os.path.join(dst, name))