'''
REPL and line reading tests, driven by a scripted session.
'''

from prompt_toolkit.history import FileHistory, InMemoryHistory

from stackcalc.cli import CLI, LineReader, history_file, open_history

from conftest import FakeSession

from pytest import raises


def session_run(*lines, args=('--no-history',)):
    session = FakeSession(lines)
    reader = LineReader(session=session)
    status = CLI().run(args=list(args), reader=reader)
    return status, session, reader


def test_prompt_shows_stack(capsys):
    status, session, reader = session_run('1', '2', '+')
    assert status == 0
    assert session.prompts == ['[  ]> ', '[ 1 ]> ', '[ 1  2 ]> ', '[ 3 ]> ']


def test_quit_closes_reader():
    status, session, reader = session_run('1', 'q', '2')
    assert status == 0
    assert session.lines == ['2']
    assert reader.session is None


def test_exit_closes_reader():
    status, session, reader = session_run('exit')
    assert status == 0
    assert reader.session is None


def test_end_of_input_closes_reader():
    status, session, reader = session_run('1')
    assert status == 0
    assert reader.session is None


def test_interrupt_is_a_normal_exit():
    status, session, reader = session_run('1', KeyboardInterrupt, '2')
    assert status == 0
    assert session.lines == ['2']
    assert reader.session is None


def test_commas_stripped():
    status, session, reader = session_run(' 1,234 ')
    assert session.prompts[-1] == '[ 1234 ]> '


def test_errors_reported_and_loop_continues(capsys):
    status, session, reader = session_run('1', '+', 'swap', '2', '+')
    out = capsys.readouterr().out
    assert 'Less than 2 element(s) on stack' in out
    assert session.prompts[-1] == '[ 3 ]> '


def test_verbose_traceback(capsys):
    session_run('+', args=('--no-history', '-v'))
    captured = capsys.readouterr()
    assert 'Less than 2 element(s) on stack' in captured.out
    assert 'Traceback' in captured.err


def test_unknown_input_is_silent(capsys):
    session_run('frobnicate')
    assert capsys.readouterr().out == ''


def test_read_line_after_close():
    reader = LineReader(session=FakeSession(['1']))
    reader.close()
    with raises(EOFError):
        reader.read_line('> ')


def test_history_file_location():
    assert history_file(env={'XDG_STATE_HOME': '/state'}) == \
        '/state/stackcalc/history'
    assert history_file(env={}).endswith('/.local/state/stackcalc/history')


def test_open_history(tmp_path):
    filename = str(tmp_path / 'deeper' / 'history')
    assert isinstance(open_history(filename), FileHistory)
    assert (tmp_path / 'deeper').is_dir()


def test_open_history_disabled(tmp_path, capsys):
    blocker = tmp_path / 'blocker'
    blocker.write_text('')
    filename = str(blocker / 'sub' / 'history')
    assert isinstance(open_history(filename), InMemoryHistory)
    assert 'history disabled' in capsys.readouterr().out


def test_no_history():
    assert isinstance(open_history(None), InMemoryHistory)


def test_deep_nesting_keeps_looping():
    status, session, reader = session_run('-' * 3000 + '1', '2')
    assert status == 0
    assert session.prompts[-1] == '[ 2 ]> '
