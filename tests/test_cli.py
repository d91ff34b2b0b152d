import importlib
import json
import os
import sys

import pytest

# run.py is imported as a module; parse_args and main are exercised directly
# with start_server patched so no networking happens.


@pytest.fixture()
def run_module():
    if 'run' in sys.modules:
        del sys.modules['run']
    mod = importlib.import_module('run')
    return mod


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert run_module.__version__ in out
    assert 'Delver' in out


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == 'generate'
    assert ns.width == 41 and ns.height == 21
    assert ns.filename == 'dungeon.svg'


def test_bare_flags_imply_generate(run_module):
    ns = run_module.parse_args(['--seed', '5', '--rooms', 'dense'])
    assert ns.command == 'generate'
    assert ns.seed == 5
    assert ns.rooms == 'dense'


def test_generate_writes_svg(run_module, tmp_path, capsys):
    target = tmp_path / 'd.svg'
    code = run_module.main(['generate', '--seed', '3', '--width', '15', '--height', '15', '--filename', str(target)])
    assert code == 0
    assert target.read_text(encoding='utf-8').startswith('<?xml')
    out = capsys.readouterr().out
    assert 'Configuration:' in out
    assert 'DUNGEON!' in out


def test_generate_json_by_extension(run_module, tmp_path):
    target = tmp_path / 'd.json'
    assert run_module.main(['--seed', '11', '--filename', str(target)]) == 0
    data = json.loads(target.read_text(encoding='utf-8'))
    assert data['seed'] == 11


def test_generate_explicit_ascii_format(run_module, tmp_path):
    target = tmp_path / 'map.out'
    assert run_module.main(['generate', '--seed', '2', '--format', 'ascii', '--filename', str(target)]) == 0
    rows = target.read_text(encoding='utf-8').rstrip('\n').split('\n')
    assert len(rows) == 21


def test_even_sizes_are_forced_odd(run_module, tmp_path, capsys):
    target = tmp_path / 'd.txt'
    code = run_module.main(['generate', '--seed', '1', '--width', '16', '--height', '16', '--filename', str(target)])
    assert code == 0
    out = capsys.readouterr().out
    assert 'forced to be odd' in out
    rows = target.read_text(encoding='utf-8').rstrip('\n').split('\n')
    assert len(rows) == 17 and len(rows[0]) == 17


@pytest.mark.parametrize(
    'argv',
    [
        ['generate', '--width', '11'],
        ['generate', '--rooms', 'crowded'],
        ['generate', '--cellsize', '10'],
        ['generate', '--format', 'png'],
    ],
)
def test_bad_options_exit_with_error(run_module, tmp_path, capsys, argv):
    code = run_module.main(argv + ['--seed', '1', '--filename', str(tmp_path / 'x.svg')])
    assert code == 1
    assert 'Error:' in capsys.readouterr().out


def test_verbose_enables_info_logs(run_module, tmp_path, capsys, monkeypatch):
    from delver import logging_utils

    monkeypatch.setattr(logging_utils, 'CURRENT_LEVEL', logging_utils.LEVELS['warn'])
    monkeypatch.setattr(logging_utils, 'JSON_MODE', False)
    target = tmp_path / 'd.svg'
    assert run_module.main(['generate', '--seed', '4', '--verbose', '--filename', str(target)]) == 0
    assert 'event=dungeon_generated' in capsys.readouterr().err


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls['host'] = host
        calls['port'] = port
        calls['debug'] = debug

    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    import delver.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    assert run_module.main(['server']) == 0
    assert calls == {'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    import delver.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    run_module.main(['server', '--host', '0.0.0.0', '--port', '8080', '--debug'])
    assert calls == {'host': '0.0.0.0', 'port': 8080, 'debug': True}


def test_env_file_argument(monkeypatch, tmp_path, run_module):
    env_file = tmp_path / '.env'
    env_file.write_text('HOST=10.0.0.5\nPORT=6001\n')
    monkeypatch.delenv('HOST', raising=False)
    monkeypatch.delenv('PORT', raising=False)

    calls = {}

    def fake_start_server(host, port, debug):
        calls['host'] = host
        calls['port'] = port

    import delver.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    try:
        run_module.main(['--env-file', str(env_file), 'server'])
    finally:
        # load_dotenv writes straight into os.environ
        os.environ.pop('HOST', None)
        os.environ.pop('PORT', None)
    assert calls == {'host': '10.0.0.5', 'port': 6001}


def test_generate_obj_writes_mesh_and_materials(run_module, tmp_path, capsys):
    target = tmp_path / 'cave.obj'
    assert run_module.main(['generate', '--seed', '8', '--filename', str(target)]) == 0
    assert (tmp_path / 'cave.mtl').exists()
    assert 'mtllib cave.mtl' in target.read_text(encoding='utf-8')
    assert '(obj)' in capsys.readouterr().out
