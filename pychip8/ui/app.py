"""Pygame front end for the CHIP-8 emulator."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pychip8.audio import SquareWaveBeeper
from pychip8.bus import MemoryError as MemoryAccessError
from pychip8.cpu import CHIP8, CPUError, Quirks
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import (
    DEFAULT_CPU_FREQUENCY,
    FrameScheduler,
    MachineConfig,
    create_machine,
    restart_machine,
)
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME, Renderer
from pychip8.video.palette import RGBColor

_FRAME_RATE = 60
_TRACE_CAPACITY = 512


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    cpu_frequency: int = DEFAULT_CPU_FREQUENCY
    mute: bool = False
    seed: int | None = None
    quirks: Quirks = field(default_factory=Quirks)
    palette: tuple[RGBColor, RGBColor] = MONOCHROME


class Chip8App:
    """Owns the pygame window, the event loop and one interpreter."""

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        self._config = config
        self._running = False
        self._paused = False
        self._pygame = None
        self._beeper: SquareWaveBeeper | None = None
        self._rom_image: bytes | None = None
        self._machine: CHIP8 | None = None
        self._renderer = Renderer(config.palette)
        self._scheduler = FrameScheduler(config.cpu_frequency)
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0

    @property
    def machine(self) -> CHIP8 | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; pass --rom <path>")

        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        self._pygame = pygame
        if not self._config.mute:
            self._initialise_audio(pygame)

        scale = self._config.scale
        surface_size = (machine.display.width * scale, machine.display.height * scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(surface_size, flags)

        clock = pygame.time.Clock()
        self._running = True
        last_time = time.perf_counter()

        while self._running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self._enter_debug_shell(machine)
                    last_time = time.perf_counter()
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_F5:
                    self._restart(machine)
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_event(pygame, event.key, pressed=True)
                elif event.type == pygame.KEYUP:
                    self._handle_key_event(pygame, event.key, pressed=False)

            now = time.perf_counter()
            elapsed = now - last_time
            last_time = now

            self._step_machine(machine, elapsed)

            if machine.display.consume_dirty():
                self._renderer.blit(machine.display, screen, pygame, scale)
                pygame.display.flip()

            if self._beeper is not None:
                self._beeper.set_active(machine.speaker.is_sounding)

            clock.tick(_FRAME_RATE)
            self._frame_counter += 1

        if self._beeper is not None:
            self._beeper.shutdown()
        pygame.quit()

    # ------------------------------------------------------------------
    # Machine lifecycle

    def _create_machine(self, rom_path: Path) -> CHIP8:
        try:
            rom_image = load_rom_from_path(rom_path)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except RomFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

        self._rom_image = rom_image
        trace_capacity = _TRACE_CAPACITY if debug_enabled("trace") else 0
        return create_machine(
            MachineConfig(
                rom_image=rom_image,
                quirks=self._config.quirks,
                seed=self._config.seed,
                trace_capacity=trace_capacity,
            )
        )

    def _restart(self, machine: CHIP8) -> None:
        restart_machine(machine, self._rom_image)
        self._scheduler.reset()
        if debug_enabled("cpu"):
            debug_log("cpu", "restart rom_bytes=%d", len(self._rom_image or b""))

    def _step_machine(self, machine: CHIP8, elapsed: float) -> None:
        frame_start = time.perf_counter()
        try:
            result = self._scheduler.run_frame(machine, elapsed)
        except (CPUError, MemoryAccessError) as exc:
            self._running = False
            if machine.trace is not None:
                machine.trace.dump("trace", limit=32)
            raise RuntimeError(f"Emulation halted at pc={machine.state.pc:#05x}: {exc}") from exc

        if self._perf_enabled:
            duration = time.perf_counter() - frame_start
            debug_log(
                "perf",
                "frame=%d steps=%d ticks=%d frame_ms=%.3f",
                self._frame_counter,
                result.steps,
                result.ticks,
                duration * 1000.0,
            )

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return

        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    # ------------------------------------------------------------------
    # Input

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        name = pygame.key.name(key_code)
        if pressed:
            mapped = machine.keyboard.press_name(name)
        else:
            mapped = machine.keyboard.release_name(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s mapped=%s pressed=%s", name, mapped, pressed)

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: CHIP8) -> None:
        print("\n=== CHIP-8 Debug Menu ===")
        print("Enter command: [c]pu, [d]isplay, [m]em, [t]race, [r]eset, [q]uit, [Enter] resume")

        paused = True
        while paused and self._running:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command == "" or command == "resume":
                paused = False
            elif command in {"c", "cpu"}:
                self._dump_cpu(machine)
            elif command in {"d", "display"}:
                self._dump_display(machine)
            elif command in {"t", "trace"}:
                self._dump_trace(machine)
            elif command in {"r", "reset"}:
                self._restart(machine)
                print("Machine reset.")
            elif command.startswith("m"):
                spec = command[1:].strip()
                self._dump_memory(machine, spec if spec else None)
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._running = False
                paused = False
            else:
                print("Commands: [Enter]=resume, [c]pu, [d]isplay, [m]em, [t]race, [r]eset, [q]uit")

        if self._pygame is not None:
            self._pygame.event.clear()

    def _dump_cpu(self, machine: CHIP8) -> None:
        snapshot = machine.snapshot()
        print(
            "CPU PC={:03X} I={:03X} DT={:02X} ST={:02X} SP={}".format(
                snapshot.pc,
                snapshot.i,
                snapshot.delay_timer,
                snapshot.sound_timer,
                len(snapshot.stack),
            )
        )
        for base in (0, 8):
            registers = " ".join(f"V{index:X}={snapshot.v[index]:02X}" for index in range(base, base + 8))
            print(registers)
        if snapshot.stack:
            print("Stack: " + " ".join(f"{address:03X}" for address in snapshot.stack))
        pressed = machine.keyboard.snapshot()
        print("Keys: " + (" ".join(f"{key:X}" for key in pressed) if pressed else "-"))

    def _dump_display(self, machine: CHIP8) -> None:
        for row in machine.display.rows():
            print("".join("#" if value else "." for value in row))

    def _dump_trace(self, machine: CHIP8, limit: int = 64) -> None:
        if machine.trace is None:
            print("Trace is disabled; set CHIP8_DEBUG=trace to record.")
            return
        lines = machine.trace.format_entries(limit)
        if not lines:
            print("Trace is empty.")
            return
        for line in lines:
            print(line)

    def _dump_memory(self, machine: CHIP8, spec: str | None = None) -> None:
        def parse_value(text: str, default: int) -> int:
            text = text.strip()
            if not text:
                return default
            return int(text, 16)

        start = machine.state.pc
        length = 0x40
        if spec:
            parts = spec.split()
            try:
                start = parse_value(parts[0], start)
                length = parse_value(parts[1], length) if len(parts) > 1 else length
            except ValueError:
                print("Usage: m [start_hex] [length_hex]")
                return

        if start < 0 or length <= 0:
            print("Start must be non-negative and length positive.")
            return

        memory = machine.memory
        end = min(start + length, memory.size)
        for addr in range(start, end, 16):
            chunk = memory.read_range(addr, min(16, end - addr))
            hex_part = " ".join(f"{value:02X}" for value in chunk)
            print(f"{addr:03X}: {hex_part}")
