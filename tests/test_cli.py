"""Tests for the term-palette CLI and command registry."""

import json
import logging
from pathlib import Path
from types import ModuleType

import pytest
from term_palette.__main__ import main
from term_palette.core.types import Command
from term_palette.registry import all_commands, collect, get

THEMES = Path(__file__).resolve().parent.parent / 'themes'


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in (
        'TERM_PALETTE_ALLOW_TRANSPARENCY',
        'TERM_PALETTE_MINIMUM_CONTRAST_RATIO',
        'TERM_PALETTE_THEME',
        'TERM_PALETTE_LOG_LEVEL',
    ):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def theme_file(tmp_path: Path) -> Path:
    f = tmp_path / 'theme.json'
    f.write_text(json.dumps({'background': '#1d1f21', 'red': '#cc6666', 'extendedAnsi': ['#000087']}))
    return f


class TestRegistry:
    def test_discovers_commands(self):
        assert set(all_commands()) == {'contrast', 'palette', 'parse', 'theme'}

    def test_unknown_command(self):
        with pytest.raises(KeyError, match='Unknown command'):
            get('nope')

    def test_collect_skips_modules_without_command(self):
        plain = ModuleType('plain')
        helper = ModuleType('helper')
        helper.command = 'not a Command'
        real = ModuleType('real')
        real.command = Command(name='real', help='A real command')
        assert collect([plain, helper, real]) == {'real': real.command}


class TestPaletteCommand:
    def test_json(self, capsys):
        main(['palette', '--json'])
        entries = json.loads(capsys.readouterr().out)
        assert len(entries) == 256
        assert entries[196] == {'index': 196, 'css': '#ff0000', 'rgba': '0xff0000ff'}

    def test_text(self, capsys):
        main(['palette'])
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 256
        assert lines[232].split()[:2] == ['232', '#080808']

    def test_with_theme(self, capsys, theme_file):
        main(['palette', '--theme', str(theme_file), '--json'])
        entries = json.loads(capsys.readouterr().out)
        assert entries[1]['css'] == '#cc6666'
        assert entries[16]['css'] == '#000087'


class TestParseCommand:
    def test_opaque(self, capsys):
        main(['parse', '#336699'])
        assert capsys.readouterr().out.strip() == '#336699 -> #336699  0x336699ff'

    def test_invalid_uses_fallback(self, capsys):
        main(['parse', 'bogus', '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['fallback'] is True
        assert result['css'] == '#000000'

    def test_transparency_flag(self, capsys):
        main(['parse', '#ff000080', '--allow-transparency', '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['rgba'] == '0xff000080'
        assert result['fallback'] is False

    def test_transparency_from_environment(self, capsys, monkeypatch):
        monkeypatch.setenv('TERM_PALETTE_ALLOW_TRANSPARENCY', 'true')
        main(['parse', '#ff000080', '--json'])
        assert json.loads(capsys.readouterr().out)['rgba'] == '0xff000080'

    def test_bad_fallback(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['parse', 'red', '--fallback', 'bogus'])
        assert exc.value.code == 1
        assert 'fallback' in capsys.readouterr().err


class TestThemeCommand:
    def test_json(self, capsys, theme_file):
        main(['theme', str(theme_file), '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['background'] == {'css': '#1d1f21', 'rgba': '0x1d1f21ff'}
        assert result['selection_transparent']['rgba'] == '0xffffff4d'
        assert result['selection_foreground'] is None
        assert len(result['ansi']) == 256

    def test_text(self, capsys, theme_file):
        main(['theme', str(theme_file)])
        out = capsys.readouterr().out
        assert '#1d1f21' in out
        assert ' 1 red' in out
        assert '(derived)' in out

    def test_theme_from_environment(self, capsys, theme_file, monkeypatch):
        monkeypatch.setenv('TERM_PALETTE_THEME', str(theme_file))
        main(['theme', '--json'])
        assert json.loads(capsys.readouterr().out)['background']['css'] == '#1d1f21'

    def test_defaults_without_file(self, capsys):
        main(['theme', '--json'])
        assert json.loads(capsys.readouterr().out)['foreground']['css'] == '#ffffff'

    def test_missing_file_exits(self, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(['theme', str(tmp_path / 'missing.json')])
        assert exc.value.code == 1
        assert 'Cannot read theme file' in capsys.readouterr().err


class TestBundledThemes:
    @pytest.mark.parametrize('name', ['tomorrow-night.json', 'solarized.json'])
    def test_applies_cleanly(self, capsys, caplog, name):
        with caplog.at_level(logging.WARNING):
            main(['theme', str(THEMES / name), '--json'])
        assert not caplog.records
        result = json.loads(capsys.readouterr().out)
        data = json.loads((THEMES / name).read_text())
        assert result['background']['css'] == data['background']
        assert result['ansi'][1]['css'] == data['red']

    def test_solarized_keeps_translucent_selection(self, capsys):
        main(['palette', '--theme', str(THEMES / 'solarized.json'), '--json'])
        assert json.loads(capsys.readouterr().out)[4]['css'] == '#268bd2'
        main(['theme', str(THEMES / 'solarized.json'), '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['selection_transparent']['rgba'] == '0x93a1a140'
        assert result['selection_foreground']['css'] == '#fdf6e3'


class TestContrastCommand:
    def test_black_on_white(self, capsys):
        main(['contrast', '#000000', '#ffffff', '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['ratio'] == 21.0
        assert result['minimum'] == 4.5
        assert result['adjusted']['css'] == '#000000'

    def test_adjusts_low_contrast(self, capsys):
        main(['contrast', '#333333', '#000000', '--ratio', '7', '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['ratio'] < 7
        assert result['adjusted_ratio'] >= 7

    def test_ratio_one_disables_adjustment(self, capsys):
        main(['contrast', '#333333', '#000000', '--ratio', '1', '--json'])
        result = json.loads(capsys.readouterr().out)
        assert result['minimum'] == 1
        assert result['adjusted'] == result['fg']

    def test_rejects_translucent(self, capsys):
        with pytest.raises(SystemExit):
            main(['contrast', '#00000080', '#ffffff'])
        assert 'opaque' in capsys.readouterr().err


class TestHelp:
    def test_lists_commands(self, capsys):
        main(['help'])
        out = capsys.readouterr().out
        for name in ('contrast', 'palette', 'parse', 'theme'):
            assert name in out

    def test_command_docs(self, capsys):
        main(['help', 'theme'])
        assert 'extendedAnsi' in capsys.readouterr().out

    def test_unknown_topic(self):
        with pytest.raises(SystemExit):
            main(['help', 'nope'])

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
