import pytest

from pychip8.cpu import CHIP8, InvalidOpcodeError
from pychip8.cpu.core import CPUSnapshot
from pychip8.utils.trace import TraceRecorder


def _snapshot(pc: int, **kwargs) -> CPUSnapshot:
    defaults = dict(v=(0,) * 16, i=0, pc=pc, stack=(), delay_timer=0, sound_timer=0)
    defaults.update(kwargs)
    return CPUSnapshot(**defaults)


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(_snapshot(0x200), 0x6012, mnemonic="LD")
    recorder.record_step(_snapshot(0x202, i=0x300), 0xA300, mnemonic="LD")
    recorder.record_step(_snapshot(0x204, stack=(0x200,)), 0x00EE, mnemonic="RET", note="ret")

    lines = list(recorder.format_entries())
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "I=0300" in lines[0]
    assert "pc=0204" in lines[1]
    assert "SP=1" in lines[1]
    assert "note=ret" in lines[1]


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(_snapshot(0x2000), None)
    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert recorder.last_entry().pc == 0x2000


def test_cpu_records_each_step_and_invalid_opcode():
    recorder = TraceRecorder(8)
    cpu = CHIP8(trace=recorder)
    cpu.load_program(b"\x60\x07\x00\x00")

    cpu.step()
    with pytest.raises(InvalidOpcodeError):
        cpu.step()

    entries = list(recorder.entries())
    assert [entry.mnemonic for entry in entries] == ["LD", "???"]
    assert entries[0].pc == 0x200
    assert entries[1].v[0] == 0x07
    assert entries[1].note == "invalid"


def test_clear_empties_buffer():
    recorder = TraceRecorder(4)
    recorder.record_step(_snapshot(0x200), 0x00E0, mnemonic="CLS")
    recorder.clear()
    assert recorder.last_entry() is None
    assert list(recorder.format_entries()) == []
