# facts.py
"""
Synthetic hardware facts.

The interpreter never invents values itself: every detection asks a
FactProvider. RandomFactProvider picks plausible entries from fixed tables
using its own random.Random, so a seed makes a run reproducible.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple


@dataclass(frozen=True)
class CpuInfo:
    vendor: str
    model: str
    cores: int
    frequency_mhz: int


@dataclass(frozen=True)
class MemoryInfo:
    size_gb: int
    kind: str
    speed_mhz: int


@dataclass(frozen=True)
class DiskInfo:
    vendor: str
    model: str
    size_gb: int
    kind: str


@dataclass(frozen=True)
class GpuInfo:
    vendor: str
    model: str
    vram_gb: int


@dataclass(frozen=True)
class NetworkInfo:
    vendor: str
    model: str
    speed: str


@dataclass(frozen=True)
class OsInfo:
    name: str
    version: str


@dataclass(frozen=True)
class BiosInfo:
    vendor: str
    kind: str
    version: str


# (test name, score) rows
BenchmarkRows = List[Tuple[str, str]]


class FactProvider(Protocol):
    """One query per detection kind. Implementations must be swappable."""

    def cpu(self) -> CpuInfo: ...

    def memory(self) -> MemoryInfo: ...

    def disk(self) -> DiskInfo: ...

    def gpu(self) -> GpuInfo: ...

    def network(self) -> NetworkInfo: ...

    def os(self) -> OsInfo: ...

    def kernel(self) -> str: ...

    def bios(self) -> BiosInfo: ...

    def mac_address(self) -> str: ...

    def ip_address(self) -> str: ...

    def benchmark(self, kind: str) -> BenchmarkRows: ...

    def updated_package_count(self) -> int: ...

    def signing_key_id(self) -> str: ...


# ---------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------

CPUS = [
    CpuInfo("Intel", "Core i9-13900K", 24, 5800),
    CpuInfo("Intel", "Core i7-12700K", 12, 5000),
    CpuInfo("Intel", "Core i5-13600K", 14, 5100),
    CpuInfo("Intel", "Xeon E5-2699 v4", 22, 3600),
    CpuInfo("AMD", "Ryzen 9 7950X", 16, 5700),
    CpuInfo("AMD", "Ryzen 7 7800X3D", 8, 5000),
    CpuInfo("AMD", "Ryzen 5 7600X", 6, 5300),
    CpuInfo("AMD", "EPYC 7742", 64, 3400),
    CpuInfo("AMD", "Threadripper 3990X", 64, 4300),
    CpuInfo("Apple", "M2 Ultra", 24, 3500),
]

MEMORY = [
    MemoryInfo(8, "DDR4", 2666),
    MemoryInfo(16, "DDR4", 3200),
    MemoryInfo(32, "DDR4", 3600),
    MemoryInfo(32, "DDR5", 4800),
    MemoryInfo(64, "DDR5", 5600),
    MemoryInfo(128, "DDR5", 6000),
    MemoryInfo(16, "DDR5", 5200),
    MemoryInfo(64, "DDR4", 3200),
]

DISKS = [
    DiskInfo("Samsung", "990 PRO", 2000, "NVMe"),
    DiskInfo("Samsung", "870 EVO", 1000, "SATA"),
    DiskInfo("WD", "Black SN850X", 2000, "NVMe"),
    DiskInfo("WD", "Blue SN570", 500, "NVMe"),
    DiskInfo("Seagate", "Barracuda", 2000, "HDD"),
    DiskInfo("Crucial", "MX500", 1000, "SATA"),
    DiskInfo("Kingston", "NV2", 1000, "NVMe"),
    DiskInfo("Toshiba", "X300", 4000, "HDD"),
    DiskInfo("Intel", "Optane 905P", 960, "NVMe"),
]

GPUS = [
    GpuInfo("NVIDIA", "GeForce RTX 4090", 24),
    GpuInfo("NVIDIA", "GeForce RTX 4080", 16),
    GpuInfo("NVIDIA", "GeForce RTX 4070 Ti", 12),
    GpuInfo("NVIDIA", "GeForce RTX 3080", 10),
    GpuInfo("AMD", "Radeon RX 7900 XTX", 24),
    GpuInfo("AMD", "Radeon RX 7800 XT", 16),
    GpuInfo("AMD", "Radeon RX 6800", 16),
    GpuInfo("Intel", "Arc A770", 16),
    GpuInfo("Intel", "Arc A380", 6),
    GpuInfo("NVIDIA", "Quadro RTX 8000", 48),
]

NICS = [
    NetworkInfo("Intel", "I225-V 2.5GbE", "2.5 Gbps"),
    NetworkInfo("Intel", "X710 10GbE", "10 Gbps"),
    NetworkInfo("Realtek", "RTL8125", "2.5 Gbps"),
    NetworkInfo("Realtek", "RTL8111", "1 Gbps"),
    NetworkInfo("Broadcom", "BCM57416", "10 Gbps"),
    NetworkInfo("Mellanox", "ConnectX-6", "100 Gbps"),
    NetworkInfo("Intel", "Wi-Fi 6E AX211", "2.4 Gbps"),
    NetworkInfo("Qualcomm", "Atheros AR9485", "300 Mbps"),
]

BIOSES = [
    BiosInfo("American Megatrends", "UEFI", "3.5.2"),
    BiosInfo("Phoenix", "UEFI", "2.1.0"),
    BiosInfo("Insyde", "UEFI", "5.0"),
    BiosInfo("Award", "Legacy BIOS", "6.0"),
    BiosInfo("AMI", "Aptio V", "1.24"),
    BiosInfo("Dell", "UEFI", "2.8.1"),
    BiosInfo("HP", "UEFI", "F.47"),
    BiosInfo("Lenovo", "UEFI", "N24ET82W"),
]

KERNELS = [
    "6.6.8-arch1-1",
    "6.5.0-14-generic",
    "6.1.52-gentoo",
    "5.15.0-91-generic",
    "6.6.6-200.fc39.x86_64",
    "6.4.12-1-MANJARO",
    "5.10.0-27-amd64",
    "6.2.16-300.fc38.x86_64",
]

SYSTEMS = [
    OsInfo("Ubuntu", "22.04.3 LTS (Jammy Jellyfish)"),
    OsInfo("Fedora", "39 (Workstation Edition)"),
    OsInfo("Debian", "12 (Bookworm)"),
    OsInfo("Arch Linux", "Rolling Release"),
    OsInfo("openSUSE", "Tumbleweed"),
    OsInfo("Linux Mint", "21.2 (Victoria)"),
    OsInfo("Pop!_OS", "22.04 LTS"),
    OsInfo("Manjaro", "23.1 (Vulcan)"),
    OsInfo("CentOS Stream", "9"),
    OsInfo("Rocky Linux", "9.3"),
]

BENCHMARKS = {
    "cpu": [
        ("Single-thread", "12,847 points"),
        ("Multi-thread", "98,432 points"),
        ("Floating point", "45,621 points"),
        ("Integer ops", "67,891 points"),
    ],
    "memory": [
        ("Read", "52,341 MB/s"),
        ("Write", "48,762 MB/s"),
        ("Copy", "45,123 MB/s"),
        ("Latency", "68.4 ns"),
    ],
    "disk": [
        ("Sequential Read", "3,521 MB/s"),
        ("Sequential Write", "3,012 MB/s"),
        ("Random Read 4K", "89,456 IOPS"),
        ("Random Write 4K", "76,234 IOPS"),
    ],
}


class RandomFactProvider:
    """Picks entries from the tables above; pass a seed for repeatable runs."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def cpu(self) -> CpuInfo:
        return self._rng.choice(CPUS)

    def memory(self) -> MemoryInfo:
        return self._rng.choice(MEMORY)

    def disk(self) -> DiskInfo:
        return self._rng.choice(DISKS)

    def gpu(self) -> GpuInfo:
        return self._rng.choice(GPUS)

    def network(self) -> NetworkInfo:
        return self._rng.choice(NICS)

    def os(self) -> OsInfo:
        return self._rng.choice(SYSTEMS)

    def kernel(self) -> str:
        return self._rng.choice(KERNELS)

    def bios(self) -> BiosInfo:
        return self._rng.choice(BIOSES)

    def mac_address(self) -> str:
        return ":".join(f"{self._rng.randrange(256):02x}" for _ in range(6))

    def ip_address(self) -> str:
        return f"192.168.{self._rng.randrange(0, 255)}.{self._rng.randrange(1, 254)}"

    def benchmark(self, kind: str) -> BenchmarkRows:
        return list(BENCHMARKS.get(kind, []))

    def updated_package_count(self) -> int:
        return self._rng.randrange(50, 200)

    def signing_key_id(self) -> str:
        return f"{self._rng.getrandbits(64):016X}"
