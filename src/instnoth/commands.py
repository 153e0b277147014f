# commands.py
"""
The closed command vocabulary.

Each vocabulary word maps to one frozen dataclass. Field metadata tells the
parser where a value comes from on the command line:

  primary()           first double-quoted substring of the line (required)
  param(key, default) `key="value"` for str defaults, `key=123` for int defaults
  argument(default)   the whole argument string as a bare number

Adding a word means adding one class here and one handler in the interpreter.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Dict, Optional, Type, TypeVar

PRIMARY = "primary"
PARAM = "param"
ARGUMENT = "argument"


def primary() -> Any:
    return field(metadata={"source": PRIMARY})


def param(key: str, default: Any) -> Any:
    return field(default=default, metadata={"source": PARAM, "key": key})


def argument(default: int, *, limit: Optional[int] = None) -> Any:
    return field(default=default, metadata={"source": ARGUMENT, "limit": limit})


@dataclass(frozen=True)
class Command:
    """Base of every vocabulary variant."""
    word: ClassVar[str] = ""


VOCABULARY: Dict[str, Type[Command]] = {}

C = TypeVar("C", bound=Type[Command])


def command(word: str) -> Callable[[C], C]:
    """Register a Command subclass under its vocabulary word."""
    def register(cls: C) -> C:
        cls.word = word
        VOCABULARY[word] = cls
        return cls
    return register


# ---------------------------------------------------------------------
# Narration / flow
# ---------------------------------------------------------------------

@command("message")
@dataclass(frozen=True)
class Message(Command):
    text: str = primary()


@command("success")
@dataclass(frozen=True)
class SuccessMessage(Command):
    text: str = primary()


@command("error")
@dataclass(frozen=True)
class ErrorMessage(Command):
    text: str = primary()


@command("warning")
@dataclass(frozen=True)
class WarningMessage(Command):
    text: str = primary()


@command("delay")
@dataclass(frozen=True)
class Delay(Command):
    ms: int = argument(100)


@command("progress")
@dataclass(frozen=True)
class Progress(Command):
    percent: int = argument(0, limit=100)


# ---------------------------------------------------------------------
# Filesystem-ish
# ---------------------------------------------------------------------

@command("create_dir")
@dataclass(frozen=True)
class CreateDir(Command):
    path: str = primary()


@command("download")
@dataclass(frozen=True)
class Download(Command):
    url: str = primary()
    size: int = param("size", 1024)


@command("extract")
@dataclass(frozen=True)
class Extract(Command):
    archive: str = primary()
    to: str = param("to", "")


@command("copy_file")
@dataclass(frozen=True)
class CopyFile(Command):
    source: str = primary()
    to: str = param("to", "")


@command("symlink")
@dataclass(frozen=True)
class Symlink(Command):
    source: str = primary()
    to: str = param("to", "")


@command("set_permission")
@dataclass(frozen=True)
class SetPermission(Command):
    path: str = primary()
    mode: str = param("mode", "755")


@command("write_config")
@dataclass(frozen=True)
class WriteConfig(Command):
    path: str = primary()
    content: str = param("content", "")


@command("configure")
@dataclass(frozen=True)
class Configure(Command):
    key: str = param("key", "")
    value: str = param("value", "")


@command("cleanup")
@dataclass(frozen=True)
class Cleanup(Command):
    pass


# ---------------------------------------------------------------------
# Dependencies / scripts
# ---------------------------------------------------------------------

@command("install_dep")
@dataclass(frozen=True)
class InstallDep(Command):
    name: str = primary()
    version: str = param("version", "latest")


@command("check_dep")
@dataclass(frozen=True)
class CheckDep(Command):
    name: str = primary()


@command("run_script")
@dataclass(frozen=True)
class RunScript(Command):
    script: str = primary()


# ---------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------

@command("detect_cpu")
@dataclass(frozen=True)
class DetectCpu(Command):
    pass


@command("detect_memory")
@dataclass(frozen=True)
class DetectMemory(Command):
    pass


@command("detect_disk")
@dataclass(frozen=True)
class DetectDisk(Command):
    pass


@command("detect_gpu")
@dataclass(frozen=True)
class DetectGpu(Command):
    pass


@command("detect_network")
@dataclass(frozen=True)
class DetectNetwork(Command):
    pass


@command("detect_os")
@dataclass(frozen=True)
class DetectOs(Command):
    pass


@command("detect_kernel")
@dataclass(frozen=True)
class DetectKernel(Command):
    pass


@command("detect_bios")
@dataclass(frozen=True)
class DetectBios(Command):
    pass


@command("scan_hardware")
@dataclass(frozen=True)
class ScanHardware(Command):
    pass


@command("detect_drivers")
@dataclass(frozen=True)
class DetectDrivers(Command):
    pass


# ---------------------------------------------------------------------
# System configuration
# ---------------------------------------------------------------------

@command("set_hostname")
@dataclass(frozen=True)
class SetHostname(Command):
    hostname: str = primary()


@command("set_timezone")
@dataclass(frozen=True)
class SetTimezone(Command):
    timezone: str = primary()


@command("set_locale")
@dataclass(frozen=True)
class SetLocale(Command):
    locale: str = primary()


@command("create_user")
@dataclass(frozen=True)
class CreateUser(Command):
    username: str = primary()
    groups: str = param("groups", "users")


@command("set_password")
@dataclass(frozen=True)
class SetPassword(Command):
    username: str = primary()


@command("enable_service")
@dataclass(frozen=True)
class EnableService(Command):
    service: str = primary()


@command("disable_service")
@dataclass(frozen=True)
class DisableService(Command):
    service: str = primary()


@command("start_service")
@dataclass(frozen=True)
class StartService(Command):
    service: str = primary()


@command("stop_service")
@dataclass(frozen=True)
class StopService(Command):
    service: str = primary()


# ---------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------

@command("mount")
@dataclass(frozen=True)
class MountPartition(Command):
    device: str = primary()
    mount_point: str = param("to", "")


@command("unmount")
@dataclass(frozen=True)
class UnmountPartition(Command):
    mount_point: str = primary()


@command("format")
@dataclass(frozen=True)
class FormatPartition(Command):
    device: str = primary()
    fs_type: str = param("fs", "ext4")


@command("create_partition")
@dataclass(frozen=True)
class CreatePartition(Command):
    device: str = primary()
    size: str = param("size", "100%")


@command("generate_fstab")
@dataclass(frozen=True)
class GenerateFstab(Command):
    pass


# ---------------------------------------------------------------------
# Kernel / boot
# ---------------------------------------------------------------------

@command("load_module")
@dataclass(frozen=True)
class LoadModule(Command):
    module: str = primary()


@command("unload_module")
@dataclass(frozen=True)
class UnloadModule(Command):
    module: str = primary()


@command("update_initramfs")
@dataclass(frozen=True)
class UpdateInitramfs(Command):
    pass


@command("update_grub")
@dataclass(frozen=True)
class UpdateGrub(Command):
    pass


@command("install_bootloader")
@dataclass(frozen=True)
class InstallBootloader(Command):
    target: str = primary()


@command("compile_kernel")
@dataclass(frozen=True)
class CompileKernel(Command):
    version: str = primary()


# ---------------------------------------------------------------------
# Integrity
# ---------------------------------------------------------------------

@command("check_integrity")
@dataclass(frozen=True)
class CheckIntegrity(Command):
    target: str = primary()


@command("verify_signature")
@dataclass(frozen=True)
class VerifySignature(Command):
    file: str = primary()


# ---------------------------------------------------------------------
# Packages / time
# ---------------------------------------------------------------------

@command("install_packages")
@dataclass(frozen=True)
class InstallPackages(Command):
    packages: str = primary()

    @property
    def names(self) -> list[str]:
        return self.packages.split()


@command("update_system")
@dataclass(frozen=True)
class UpdateSystem(Command):
    pass


@command("sync_time")
@dataclass(frozen=True)
class SyncTime(Command):
    pass


# ---------------------------------------------------------------------
# Testing / benchmarks
# ---------------------------------------------------------------------

@command("run_test")
@dataclass(frozen=True)
class RunTest(Command):
    name: str = primary()
    duration: int = param("duration", 1000)


@command("test_hardware")
@dataclass(frozen=True)
class TestHardware(Command):
    component: str = primary()


@command("benchmark_cpu")
@dataclass(frozen=True)
class BenchmarkCpu(Command):
    pass


@command("benchmark_memory")
@dataclass(frozen=True)
class BenchmarkMemory(Command):
    pass


@command("benchmark_disk")
@dataclass(frozen=True)
class BenchmarkDisk(Command):
    pass


# ---------------------------------------------------------------------
# Networking / drivers
# ---------------------------------------------------------------------

@command("network_config")
@dataclass(frozen=True)
class NetworkConfig(Command):
    interface: str = primary()
    config: str = param("config", "dhcp")


@command("firewall_rule")
@dataclass(frozen=True)
class FirewallRule(Command):
    rule: str = primary()


@command("install_driver")
@dataclass(frozen=True)
class InstallDriver(Command):
    driver: str = primary()
