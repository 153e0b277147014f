# interpreter.py
"""
Plays a Program back as a sequence of effects.

Handlers only describe what a command does (title, details, nominal
duration, logical result). `execute` applies pacing afterwards, so quick
mode is handled in one place: durations collapse to zero, results do not.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, replace
from functools import partial
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Type

from . import commands as c
from .effects import Effect, EffectKind
from .facts import FactProvider
from .model import Phase, Program
from .timing import Clock, RealClock

logger = logging.getLogger(__name__)

# download pacing: one chunk of this many units per tick
DOWNLOAD_CHUNK = 30
DOWNLOAD_TICK_MS = 40

EXTRACTED_FILES = ("bin/main", "lib/libcore.so", "share/data.dat", "etc/config.conf", "doc/README.md")

SCRIPT_OUTPUT = ("Initializing...", "Loading modules...", "Applying configuration...", "Done.")

INITRAMFS_STEPS = ("Building modules...", "Generating image...", "Compressing (gzip)...", "Writing /boot/initramfs.img...")

GRUB_ENTRIES = ("Linux 6.6.8-arch1-1", "Linux 6.6.8-arch1-1 (fallback)", "Windows Boot Manager", "UEFI Firmware Settings")

BOOTLOADER_STEPS = (
    "Checking EFI/BIOS mode...",
    "Installing boot files...",
    "Creating NVRAM entry...",
    "Generating configuration...",
)

KERNEL_STAGES = (
    ("Configuring", 500),
    ("Compiling kernel", 2000),
    ("Compiling modules", 1500),
    ("Installing modules", 800),
    ("Installing kernel", 400),
)

UPDATE_STAGES = (
    "Syncing repositories...",
    "Checking for updates...",
    "Downloading packages...",
    "Installing updates...",
    "Cleaning cache...",
)

FSTAB_ENTRIES = (
    ("UUID=xxxx-xxxx", "/", "ext4", "defaults", "0 1"),
    ("UUID=yyyy-yyyy", "/boot/efi", "vfat", "umask=0077", "0 2"),
    ("UUID=zzzz-zzzz", "/home", "ext4", "defaults", "0 2"),
    ("tmpfs", "/tmp", "tmpfs", "defaults,nosuid,nodev", "0 0"),
)

HARDWARE_SUITES = {
    "memory": ("Memory cell check", "Read/write test", "Stress test"),
    "ram": ("Memory cell check", "Read/write test", "Stress test"),
    "cpu": ("Arithmetic operations", "SIMD instructions", "Thermal monitoring"),
    "disk": ("Sector check", "SMART test", "Read/write speed"),
    "storage": ("Sector check", "SMART test", "Read/write speed"),
    "gpu": ("Rendering", "CUDA/OpenCL compute", "Temperature"),
}
DEFAULT_SUITE = ("Basic test", "Functional test")
HARDWARE_TEST_MS = 500

BUSES = (
    ("PCI", "Display adapter, Network controller, USB controller"),
    ("USB", "Keyboard, Mouse, USB Hub"),
    ("ACPI", "Power management, Thermal zones"),
    ("SATA", "SSD, HDD"),
    ("NVMe", "NVMe SSD"),
)

DRIVERS = (
    ("nvidia", "NVIDIA graphics"),
    ("iwlwifi", "Intel Wi-Fi"),
    ("r8169", "Realtek Ethernet"),
    ("xhci_hcd", "USB 3.0"),
    ("nvme", "NVMe SSD"),
    ("snd_hda_intel", "Intel HD Audio"),
)

SERVICE_VERBS = {
    "enable": "Enabling",
    "disable": "Disabling",
    "start": "Starting",
    "stop": "Stopping",
}

BENCHMARK_STEP_MS = {"cpu": 400, "memory": 300, "disk": 400}
BENCHMARK_TITLES = {"cpu": "CPU benchmark", "memory": "Memory benchmark", "disk": "Disk benchmark"}


def download_ms(size: int) -> int:
    chunks = -(-size // DOWNLOAD_CHUNK)
    return chunks * DOWNLOAD_TICK_MS


class Interpreter:
    """
    Executes programs into effects.

    Args:
        facts: supplier of every detected value
        clock: timing policy for nominal durations (RealClock by default)
        quick: collapse every duration to zero
        verbose: attach the shell commands each operation stands for
    """

    def __init__(
        self,
        facts: FactProvider,
        *,
        clock: Optional[Clock] = None,
        quick: bool = False,
        verbose: bool = False,
    ):
        self.facts = facts
        self.clock = clock if clock is not None else RealClock()
        self.quick = quick
        self.verbose = verbose
        self.progress = 0
        self.elapsed_ms = 0

        self._handlers: Dict[Type[c.Command], Callable[[Any], Effect]] = {
            c.Message: partial(self._say, "message"),
            c.SuccessMessage: partial(self._say, "success"),
            c.ErrorMessage: partial(self._say, "error"),
            c.WarningMessage: partial(self._say, "warning"),
            c.Delay: self._delay,
            c.Progress: self._progress,
            c.CreateDir: self._create_dir,
            c.Download: self._download,
            c.Extract: self._extract,
            c.CopyFile: self._copy_file,
            c.Symlink: self._symlink,
            c.SetPermission: self._set_permission,
            c.WriteConfig: self._write_config,
            c.Configure: self._configure,
            c.Cleanup: self._cleanup,
            c.InstallDep: self._install_dep,
            c.CheckDep: self._check_dep,
            c.RunScript: self._run_script,
            c.DetectCpu: self._detect_cpu,
            c.DetectMemory: self._detect_memory,
            c.DetectDisk: self._detect_disk,
            c.DetectGpu: self._detect_gpu,
            c.DetectNetwork: self._detect_network,
            c.DetectOs: self._detect_os,
            c.DetectKernel: self._detect_kernel,
            c.DetectBios: self._detect_bios,
            c.ScanHardware: self._scan_hardware,
            c.DetectDrivers: self._detect_drivers,
            c.SetHostname: self._set_hostname,
            c.SetTimezone: self._set_timezone,
            c.SetLocale: self._set_locale,
            c.CreateUser: self._create_user,
            c.SetPassword: self._set_password,
            c.EnableService: partial(self._service, "enable"),
            c.DisableService: partial(self._service, "disable"),
            c.StartService: partial(self._service, "start"),
            c.StopService: partial(self._service, "stop"),
            c.MountPartition: self._mount,
            c.UnmountPartition: self._unmount,
            c.FormatPartition: self._format,
            c.CreatePartition: self._create_partition,
            c.GenerateFstab: self._generate_fstab,
            c.LoadModule: self._load_module,
            c.UnloadModule: self._unload_module,
            c.UpdateInitramfs: self._update_initramfs,
            c.UpdateGrub: self._update_grub,
            c.InstallBootloader: self._install_bootloader,
            c.CompileKernel: self._compile_kernel,
            c.CheckIntegrity: self._check_integrity,
            c.VerifySignature: self._verify_signature,
            c.InstallPackages: self._install_packages,
            c.UpdateSystem: self._update_system,
            c.SyncTime: self._sync_time,
            c.RunTest: self._run_test,
            c.TestHardware: self._test_hardware,
            c.BenchmarkCpu: partial(self._benchmark, "cpu"),
            c.BenchmarkMemory: partial(self._benchmark, "memory"),
            c.BenchmarkDisk: partial(self._benchmark, "disk"),
            c.NetworkConfig: self._network_config,
            c.FirewallRule: self._firewall_rule,
            c.InstallDriver: self._install_driver,
        }

    @property
    def handled_types(self) -> frozenset:
        return frozenset(self._handlers)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, program: Program) -> List[Effect]:
        """All effects of a program, one per command, in declaration order."""
        return list(self.stream(program))

    def begin(self, program: Program) -> None:
        """Start a new program: progress starts from zero again."""
        self.progress = 0
        logger.info("Running %s %s (%d commands)", program.name, program.version, program.command_count)

    def stream(self, program: Program) -> Iterator[Effect]:
        self.begin(program)
        for phase in program.phases:
            yield from self.stream_phase(phase)

    def stream_phase(self, phase: Phase) -> Iterator[Effect]:
        for cmd in phase.commands:
            yield self.execute(cmd, phase=phase.name)

    def execute(self, cmd: c.Command, phase: str = "") -> Effect:
        handler = self._handlers.get(type(cmd))
        if handler is None:
            raise TypeError(f"Not a vocabulary command: {cmd!r}")
        effect = handler(cmd)
        return replace(effect, phase=phase, elapsed_ms=self._pace(effect.duration_ms))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pace(self, ms: int) -> int:
        if self.quick or ms <= 0:
            return 0
        self.clock.sleep(ms)
        self.elapsed_ms += ms
        return ms

    def _shell(self, *lines: str) -> Tuple[str, ...]:
        return lines if self.verbose else ()

    @staticmethod
    def _timed(cmd: c.Command, title: str, ms: int, **kwargs: Any) -> Effect:
        return Effect(kind=EffectKind.TIMED, command=cmd, phase="", title=title, duration_ms=ms, **kwargs)

    @staticmethod
    def _fact(cmd: c.Command, title: str, ms: int, facts: Sequence[Tuple[str, str]], **kwargs: Any) -> Effect:
        return Effect(
            kind=EffectKind.FACT,
            command=cmd,
            phase="",
            title=title,
            duration_ms=ms,
            facts=tuple(facts),
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Narration / flow
    # ------------------------------------------------------------------

    def _say(self, tone: str, cmd: Any) -> Effect:
        return Effect(kind=EffectKind.NARRATION, command=cmd, phase="", title=cmd.text, tone=tone)

    def _delay(self, cmd: c.Delay) -> Effect:
        return self._timed(cmd, "", cmd.ms)

    def _progress(self, cmd: c.Progress) -> Effect:
        self.progress = cmd.percent
        return Effect(
            kind=EffectKind.NARRATION,
            command=cmd,
            phase="",
            title="Progress",
            tone="progress",
            result={"progress": cmd.percent},
        )

    # ------------------------------------------------------------------
    # Filesystem-ish
    # ------------------------------------------------------------------

    def _create_dir(self, cmd: c.CreateDir) -> Effect:
        return self._timed(cmd, f"Creating directory: {cmd.path}", 200, shell=self._shell(f"mkdir -p {cmd.path}"))

    def _download(self, cmd: c.Download) -> Effect:
        return self._timed(
            cmd,
            f"Downloading: {cmd.url}",
            download_ms(cmd.size),
            details=(f"Downloaded: {cmd.size} bytes",),
            shell=self._shell(f"curl -LO {cmd.url}"),
            result={"bytes": cmd.size},
        )

    def _extract(self, cmd: c.Extract) -> Effect:
        return self._timed(
            cmd,
            f"Extracting: {cmd.archive} -> {cmd.to}",
            100 * len(EXTRACTED_FILES),
            details=EXTRACTED_FILES + (f"{len(EXTRACTED_FILES)} files extracted",),
            shell=self._shell(f"tar -xf {cmd.archive} -C {cmd.to or '.'}"),
            result={"files": len(EXTRACTED_FILES)},
        )

    def _copy_file(self, cmd: c.CopyFile) -> Effect:
        return self._timed(cmd, f"Copying: {cmd.source} -> {cmd.to}", 150, shell=self._shell(f"cp {cmd.source} {cmd.to}"))

    def _symlink(self, cmd: c.Symlink) -> Effect:
        return self._timed(
            cmd, f"Creating link: {cmd.source} -> {cmd.to}", 100, shell=self._shell(f"ln -s {cmd.source} {cmd.to}")
        )

    def _set_permission(self, cmd: c.SetPermission) -> Effect:
        return self._timed(
            cmd, f"Setting mode {cmd.mode} on {cmd.path}", 50, shell=self._shell(f"chmod {cmd.mode} {cmd.path}")
        )

    def _write_config(self, cmd: c.WriteConfig) -> Effect:
        preview: Tuple[str, ...] = ()
        if self.verbose and cmd.content:
            lines = cmd.content.splitlines()
            preview = tuple(lines[:3]) + (("...",) if len(lines) > 3 else ())
        return self._timed(cmd, f"Writing config: {cmd.path}", 100, details=preview)

    def _configure(self, cmd: c.Configure) -> Effect:
        return self._timed(cmd, f"Configuring: {cmd.key}={cmd.value}", 100, result={cmd.key: cmd.value})

    def _cleanup(self, cmd: c.Cleanup) -> Effect:
        return self._timed(cmd, "Cleaning up temporary files", 300, shell=self._shell("rm -rf /tmp/instnoth_*"))

    # ------------------------------------------------------------------
    # Dependencies / scripts
    # ------------------------------------------------------------------

    def _install_dep(self, cmd: c.InstallDep) -> Effect:
        return self._timed(
            cmd,
            f"Installing dependency: {cmd.name} (v{cmd.version})",
            1500,
            status="OK",
            result={"installed": cmd.name, "version": cmd.version},
        )

    def _check_dep(self, cmd: c.CheckDep) -> Effect:
        return self._timed(cmd, f"Checking dependency: {cmd.name}", 200, status="OK")

    def _run_script(self, cmd: c.RunScript) -> Effect:
        return self._timed(
            cmd,
            f"Running script: {cmd.script}",
            150 * len(SCRIPT_OUTPUT),
            details=SCRIPT_OUTPUT,
            shell=self._shell(f"sh {cmd.script}"),
        )

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def _detect_cpu(self, cmd: c.DetectCpu) -> Effect:
        cpu = self.facts.cpu()
        return self._fact(
            cmd,
            "Detecting CPU",
            500,
            [
                ("Vendor", cpu.vendor),
                ("Model", cpu.model),
                ("Cores", f"{cpu.cores} cores"),
                ("Frequency", f"{cpu.frequency_mhz} MHz"),
            ],
            result=asdict(cpu),
        )

    def _detect_memory(self, cmd: c.DetectMemory) -> Effect:
        mem = self.facts.memory()
        return self._fact(
            cmd,
            "Detecting memory",
            400,
            [("Size", f"{mem.size_gb} GB"), ("Type", mem.kind), ("Speed", f"{mem.speed_mhz} MHz")],
            result=asdict(mem),
        )

    def _detect_disk(self, cmd: c.DetectDisk) -> Effect:
        disk = self.facts.disk()
        return self._fact(
            cmd,
            "Detecting storage",
            600,
            [("Vendor", disk.vendor), ("Model", disk.model), ("Size", f"{disk.size_gb} GB"), ("Type", disk.kind)],
            result=asdict(disk),
        )

    def _detect_gpu(self, cmd: c.DetectGpu) -> Effect:
        gpu = self.facts.gpu()
        return self._fact(
            cmd,
            "Detecting graphics",
            500,
            [("Vendor", gpu.vendor), ("Model", gpu.model), ("Memory", f"{gpu.vram_gb} GB VRAM")],
            result=asdict(gpu),
        )

    def _detect_network(self, cmd: c.DetectNetwork) -> Effect:
        nic = self.facts.network()
        mac = self.facts.mac_address()
        ip = self.facts.ip_address()
        return self._fact(
            cmd,
            "Detecting network adapters",
            500,
            [("Adapter", f"{nic.vendor} {nic.model}"), ("Speed", nic.speed), ("MAC", mac), ("IP", ip)],
            result={**asdict(nic), "mac": mac, "ip": ip},
        )

    def _detect_os(self, cmd: c.DetectOs) -> Effect:
        info = self.facts.os()
        return self._fact(
            cmd,
            "Detecting operating system",
            300,
            [("System", info.name), ("Version", info.version)],
            result=asdict(info),
        )

    def _detect_kernel(self, cmd: c.DetectKernel) -> Effect:
        kernel = self.facts.kernel()
        return self._fact(cmd, "Detecting kernel version", 200, [("Kernel", kernel)], result={"kernel": kernel})

    def _detect_bios(self, cmd: c.DetectBios) -> Effect:
        bios = self.facts.bios()
        return self._fact(
            cmd,
            "Detecting BIOS/UEFI",
            400,
            [("Vendor", bios.vendor), ("Type", bios.kind), ("Version", bios.version)],
            result=asdict(bios),
        )

    def _scan_hardware(self, cmd: c.ScanHardware) -> Effect:
        return self._timed(
            cmd,
            "Scanning hardware",
            300 * len(BUSES),
            details=tuple(f"Bus {bus}: {found}" for bus, found in BUSES) + ("Scan complete",),
        )

    def _detect_drivers(self, cmd: c.DetectDrivers) -> Effect:
        return self._timed(
            cmd,
            "Detecting required drivers",
            150 * len(DRIVERS),
            details=tuple(f"+ {name} - {desc}" for name, desc in DRIVERS),
            result={"drivers": [name for name, _ in DRIVERS]},
        )

    # ------------------------------------------------------------------
    # System configuration
    # ------------------------------------------------------------------

    def _set_hostname(self, cmd: c.SetHostname) -> Effect:
        return self._timed(
            cmd, f"Setting hostname: {cmd.hostname}", 100, shell=self._shell(f"hostnamectl set-hostname {cmd.hostname}")
        )

    def _set_timezone(self, cmd: c.SetTimezone) -> Effect:
        return self._timed(
            cmd, f"Setting timezone: {cmd.timezone}", 100, shell=self._shell(f"timedatectl set-timezone {cmd.timezone}")
        )

    def _set_locale(self, cmd: c.SetLocale) -> Effect:
        return self._timed(
            cmd, f"Setting locale: {cmd.locale}", 100, shell=self._shell(f"localectl set-locale LANG={cmd.locale}")
        )

    def _create_user(self, cmd: c.CreateUser) -> Effect:
        return self._timed(
            cmd,
            f"Creating user: {cmd.username}",
            300,
            details=(f"Groups: {cmd.groups}", "User created"),
            shell=self._shell(f"useradd -m -G {cmd.groups} {cmd.username}"),
        )

    def _set_password(self, cmd: c.SetPassword) -> Effect:
        return self._timed(
            cmd, f"Setting password for {cmd.username}", 300, status="OK", shell=self._shell(f"passwd {cmd.username}")
        )

    def _service(self, action: str, cmd: Any) -> Effect:
        return self._timed(
            cmd,
            f"{SERVICE_VERBS[action]} service: {cmd.service}",
            200,
            status="OK",
            shell=self._shell(f"systemctl {action} {cmd.service}"),
        )

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _mount(self, cmd: c.MountPartition) -> Effect:
        return self._timed(
            cmd,
            f"Mounting {cmd.device} -> {cmd.mount_point}",
            300,
            status="OK",
            shell=self._shell(f"mount {cmd.device} {cmd.mount_point}"),
        )

    def _unmount(self, cmd: c.UnmountPartition) -> Effect:
        return self._timed(
            cmd, f"Unmounting {cmd.mount_point}", 200, status="OK", shell=self._shell(f"umount {cmd.mount_point}")
        )

    def _format(self, cmd: c.FormatPartition) -> Effect:
        return self._timed(
            cmd,
            f"Formatting {cmd.device} as {cmd.fs_type}",
            2000,
            details=("Creating filesystem",),
            shell=self._shell(f"mkfs.{cmd.fs_type} {cmd.device}"),
        )

    def _create_partition(self, cmd: c.CreatePartition) -> Effect:
        return self._timed(
            cmd,
            f"Creating partition on {cmd.device} ({cmd.size})",
            500,
            details=("Partition created",),
            shell=self._shell(f"parted {cmd.device} mkpart primary 0% {cmd.size}"),
        )

    def _generate_fstab(self, cmd: c.GenerateFstab) -> Effect:
        rows = tuple("+ " + " ".join(entry) for entry in FSTAB_ENTRIES)
        return self._timed(
            cmd,
            "Generating /etc/fstab",
            150 * len(FSTAB_ENTRIES),
            details=rows + ("fstab generated",),
            shell=self._shell("genfstab -U /mnt >> /mnt/etc/fstab"),
        )

    # ------------------------------------------------------------------
    # Kernel / boot
    # ------------------------------------------------------------------

    def _load_module(self, cmd: c.LoadModule) -> Effect:
        return self._timed(
            cmd, f"Loading kernel module: {cmd.module}", 300, status="OK", shell=self._shell(f"modprobe {cmd.module}")
        )

    def _unload_module(self, cmd: c.UnloadModule) -> Effect:
        return self._timed(
            cmd,
            f"Unloading kernel module: {cmd.module}",
            200,
            status="OK",
            shell=self._shell(f"modprobe -r {cmd.module}"),
        )

    def _update_initramfs(self, cmd: c.UpdateInitramfs) -> Effect:
        return self._timed(
            cmd,
            "Updating initramfs",
            400 * len(INITRAMFS_STEPS),
            details=INITRAMFS_STEPS + ("initramfs updated",),
            shell=self._shell("update-initramfs -u"),
        )

    def _update_grub(self, cmd: c.UpdateGrub) -> Effect:
        entries = tuple(f"  * {entry}" for entry in GRUB_ENTRIES)
        return self._timed(
            cmd,
            "Updating GRUB",
            300 + 150 * len(GRUB_ENTRIES),
            details=("Generating grub.cfg...", "Found entries:") + entries + ("GRUB updated",),
            shell=self._shell("grub-mkconfig -o /boot/grub/grub.cfg"),
        )

    def _install_bootloader(self, cmd: c.InstallBootloader) -> Effect:
        return self._timed(
            cmd,
            f"Installing bootloader on {cmd.target}",
            400 * len(BOOTLOADER_STEPS),
            details=BOOTLOADER_STEPS + (f"GRUB installed on {cmd.target}",),
            shell=self._shell(f"grub-install {cmd.target}"),
        )

    def _compile_kernel(self, cmd: c.CompileKernel) -> Effect:
        return self._timed(
            cmd,
            f"Compiling kernel {cmd.version}",
            sum(ms for _, ms in KERNEL_STAGES),
            details=tuple(stage for stage, _ in KERNEL_STAGES) + (f"Kernel {cmd.version} compiled",),
            shell=self._shell("make -j$(nproc)", "make modules_install", "make install"),
        )

    # ------------------------------------------------------------------
    # Integrity
    # ------------------------------------------------------------------

    def _check_integrity(self, cmd: c.CheckIntegrity) -> Effect:
        return self._timed(
            cmd,
            f"Checking integrity: {cmd.target}",
            1500,
            details=("Computing checksums", "Integrity confirmed"),
            shell=self._shell(f"sha256sum -c {cmd.target}"),
        )

    def _verify_signature(self, cmd: c.VerifySignature) -> Effect:
        details: Tuple[str, ...] = ()
        if self.verbose:
            details = (f"Key ID: {self.facts.signing_key_id()}",)
        return self._timed(
            cmd,
            f"Verifying signature: {cmd.file}",
            400,
            status="VALID",
            details=details,
            shell=self._shell(f"gpg --verify {cmd.file}"),
        )

    # ------------------------------------------------------------------
    # Packages / time
    # ------------------------------------------------------------------

    def _install_packages(self, cmd: c.InstallPackages) -> Effect:
        names = cmd.names
        return self._timed(
            cmd,
            f"Installing packages ({len(names)})",
            800 * len(names),
            details=tuple(f"{name} ok" for name in names),
            result={"packages": names},
        )

    def _update_system(self, cmd: c.UpdateSystem) -> Effect:
        updated = self.facts.updated_package_count()
        return self._timed(
            cmd,
            "Updating system",
            500 * len(UPDATE_STAGES),
            details=UPDATE_STAGES + (f"Updated {updated} packages",),
            result={"updated": updated},
        )

    def _sync_time(self, cmd: c.SyncTime) -> Effect:
        details: Tuple[str, ...] = ()
        if self.verbose:
            details = ("Server: pool.ntp.org", "Offset: +0.003s")
        return self._timed(cmd, "Synchronizing time (NTP)", 500, status="OK", details=details)

    # ------------------------------------------------------------------
    # Testing / benchmarks
    # ------------------------------------------------------------------

    def _run_test(self, cmd: c.RunTest) -> Effect:
        return self._timed(cmd, f"Test: {cmd.name}", cmd.duration, status="PASSED")

    def _test_hardware(self, cmd: c.TestHardware) -> Effect:
        suite = HARDWARE_SUITES.get(cmd.component, DEFAULT_SUITE)
        return self._timed(
            cmd,
            f"Testing {cmd.component}",
            HARDWARE_TEST_MS * len(suite),
            details=tuple(f"Test: {name} PASSED" for name in suite),
            result={"tests": list(suite)},
        )

    def _benchmark(self, kind: str, cmd: Any) -> Effect:
        rows = self.facts.benchmark(kind)
        return self._fact(
            cmd,
            BENCHMARK_TITLES[kind],
            BENCHMARK_STEP_MS[kind] * len(rows),
            rows,
            result=dict(rows),
        )

    # ------------------------------------------------------------------
    # Networking / drivers
    # ------------------------------------------------------------------

    def _network_config(self, cmd: c.NetworkConfig) -> Effect:
        if cmd.config == "dhcp":
            ip = self.facts.ip_address()
            details: Tuple[str, ...] = (f"Obtained {ip} via DHCP",)
            result: Dict[str, Any] = {"config": cmd.config, "ip": ip}
            ms = 800
        else:
            details = ("Applying static configuration",)
            result = {"config": cmd.config}
            ms = 300
        return self._timed(
            cmd,
            f"Configuring network: {cmd.interface} ({cmd.config})",
            ms + 400,
            details=details + ("Checking connectivity...", "Network configured"),
            result=result,
        )

    def _firewall_rule(self, cmd: c.FirewallRule) -> Effect:
        return self._timed(cmd, f"Adding firewall rule: {cmd.rule}", 100)

    def _install_driver(self, cmd: c.InstallDriver) -> Effect:
        return self._timed(cmd, f"Installing driver: {cmd.driver}", 1500, status="OK", result={"installed": cmd.driver})
