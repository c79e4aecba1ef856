from pychip8.utils import debug as debug_module


def test_debug_disabled_without_env(monkeypatch, capsys):
    monkeypatch.delenv("CHIP8_DEBUG", raising=False)
    debug_module.reload_categories()

    assert not debug_module.debug_enabled("cpu")
    debug_module.debug_log("cpu", "hidden %d", 1)
    assert capsys.readouterr().out == ""


def test_debug_categories_from_env(monkeypatch, capsys):
    monkeypatch.setenv("CHIP8_DEBUG", "cpu, Input")
    debug_module.reload_categories()
    try:
        assert debug_module.debug_enabled("cpu")
        assert debug_module.debug_enabled("input")
        assert not debug_module.debug_enabled("audio")

        debug_module.debug_log("cpu", "pc=%03x", 0x200)
        assert capsys.readouterr().out == "[CHIP8][cpu] pc=200\n"
    finally:
        monkeypatch.delenv("CHIP8_DEBUG")
        debug_module.reload_categories()


def test_debug_all_enables_everything(monkeypatch):
    monkeypatch.setenv("CHIP8_DEBUG", "all")
    debug_module.reload_categories()
    try:
        assert debug_module.debug_enabled("anything")
    finally:
        monkeypatch.delenv("CHIP8_DEBUG")
        debug_module.reload_categories()


def test_debug_ignores_blank_entries_and_keeps_bad_format(monkeypatch, capsys):
    monkeypatch.setenv(debug_module.ENV_VARIABLE, " , trace ,")
    debug_module.reload_categories()
    try:
        assert debug_module.debug_enabled("trace")
        assert not debug_module.debug_enabled("cpu")

        debug_module.debug_log("trace", "pc=%d", "x")
        assert capsys.readouterr().out == "[CHIP8][trace] pc=%d ('x',)\n"
    finally:
        monkeypatch.delenv(debug_module.ENV_VARIABLE)
        debug_module.reload_categories()
