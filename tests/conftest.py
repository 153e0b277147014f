# conftest.py
from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from instnoth.facts import BENCHMARKS, BiosInfo, CpuInfo, DiskInfo, GpuInfo, MemoryInfo, NetworkInfo, OsInfo
from instnoth.timing import SimulatedClock


class FixedFacts:
    """Same answers every time; counts how often each fact was asked for."""

    def __init__(self):
        self.calls = []

    def _ask(self, name, value):
        self.calls.append(name)
        return value

    def cpu(self):
        return self._ask("cpu", CpuInfo("AMD", "Ryzen 9 7950X", 16, 5700))

    def memory(self):
        return self._ask("memory", MemoryInfo(64, "DDR5", 5600))

    def disk(self):
        return self._ask("disk", DiskInfo("Samsung", "990 PRO", 2000, "NVMe"))

    def gpu(self):
        return self._ask("gpu", GpuInfo("NVIDIA", "GeForce RTX 4090", 24))

    def network(self):
        return self._ask("network", NetworkInfo("Intel", "I225-V 2.5GbE", "2.5 Gbps"))

    def os(self):
        return self._ask("os", OsInfo("Debian", "12 (Bookworm)"))

    def kernel(self):
        return self._ask("kernel", "6.6.8-arch1-1")

    def bios(self):
        return self._ask("bios", BiosInfo("Phoenix", "UEFI", "2.1.0"))

    def mac_address(self):
        return self._ask("mac_address", "aa:bb:cc:dd:ee:ff")

    def ip_address(self):
        return self._ask("ip_address", "192.168.1.50")

    def benchmark(self, kind):
        return self._ask("benchmark", list(BENCHMARKS[kind]))

    def updated_package_count(self):
        return self._ask("updated_package_count", 42)

    def signing_key_id(self):
        return self._ask("signing_key_id", "0123456789ABCDEF")


@pytest.fixture
def facts():
    return FixedFacts()


@pytest.fixture
def clock():
    return SimulatedClock()


@pytest.fixture
def write_script(tmp_path):
    """write_script("a.instnoth", text) -> Path; text is dedented."""

    def write(name: str, text: str, folder: Path = tmp_path) -> Path:
        path = folder / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip(), encoding="utf-8")
        return path

    return write


def script(package: str, *depends: str, body: str = "") -> str:
    """Minimal script text with optional depends and one phase body."""
    lines = [f'package: "{package}"']
    if depends:
        lines.append("depends: " + ", ".join(f'"{d}"' for d in depends))
    lines.append('phase "Main" {')
    lines.extend(f"    {line}" for line in body.splitlines() if line.strip())
    lines.append("}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def script_text():
    return script
