import io

import pytest

from bytetape import run, run_from_state, parse, execute
from bytetape.ast import Increment, Decrement, Forward, Backward, Loop, LoopEnd, Out, In
from bytetape.codec import to_char
from bytetape.interpreter import Interpreter
from bytetape.state import State


def test_fresh_state():
    state = State()
    assert state.mem == [0]
    assert state.pointer == 0
    assert state.outted is False


def test_increment_wraps():
    state = State(mem=[255])
    Interpreter().execute(Increment(), state)
    assert state.mem == [0]


def test_decrement_wraps():
    state = run('-')
    assert state.mem == [255]


def test_increment_then_decrement_restores_cell():
    assert run('+-').mem == [0]
    assert run('+' * 256).mem == [0]


def test_forward_grows_by_one_cell():
    interp = Interpreter()
    state = State()
    interp.execute(Forward(), state)
    assert state.mem == [0, 0]
    assert state.pointer == 1
    interp.execute(Forward(), state)
    assert len(state.mem) == 3


def test_forward_inside_tape_does_not_grow():
    state = State(mem=[1, 2, 3], pointer=0)
    Interpreter().execute(Forward(), state)
    assert state.mem == [1, 2, 3]
    assert state.pointer == 1


def test_backward_at_zero_is_noop():
    state = run('<<<')
    assert state.pointer == 0
    assert state.mem == [0]


def test_backward_does_not_shrink_tape():
    state = run('>>+<<')
    assert state.pointer == 0
    assert state.mem == [0, 0, 1]


@pytest.mark.parametrize('node', [Increment(), Decrement(), Forward(), Backward(), LoopEnd(), Out(), In()])
@pytest.mark.parametrize('mem,pointer', [([0], 0), ([255], 0), ([7, 0, 3], 2), ([1, 2], 1)])
def test_leaf_instructions_keep_pointer_in_bounds(node, mem, pointer):
    state = State(mem=list(mem), pointer=pointer)
    Interpreter(stdin=io.StringIO("x"), stdout=io.StringIO()).execute(node, state)
    assert 0 <= state.pointer < len(state.mem)
    assert len(state.mem) >= len(mem)


def test_copy_loop():
    state = run('+[>+<-]')
    assert state.mem[0] == 0
    assert state.mem[1] == 1
    assert state.pointer == 0


def test_loop_body_runs_once_on_zero_cell():
    # The exit check happens after each pass, never before the first
    state = run('[>]')
    assert state.pointer == 1
    assert state.mem == [0, 0]


def test_loop_on_zero_cell_wraps_back_to_zero():
    state = run('[-]')
    assert state.mem == [0]


def test_nested_loops_multiply():
    state = run('+++[>++++[>+<-]<-]')
    assert state.mem == [0, 0, 12]


def test_out_writes_codec_char(capsys):
    state = run('++.')
    assert capsys.readouterr().out == to_char(2)
    assert state.outted is True


def test_out_uses_given_stream():
    buf = io.StringIO()
    state = Interpreter(stdout=buf).run(parse('+' * 65 + '.+.'))
    assert buf.getvalue() == 'AB'
    assert state.outted


def test_in_reads_one_char():
    stdin = io.StringIO('Az')
    state = Interpreter(stdin=stdin).run(parse(','))
    assert state.mem == [65]
    assert state.outted is True
    assert stdin.read() == 'z'


def test_in_on_empty_input_is_noop(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO(''))
    state = run(',')
    assert state.mem == [0]
    assert state.outted is False


def test_in_keeps_cell_at_end_of_input():
    state = State(mem=[42])
    Interpreter(stdin=io.StringIO('')).execute(In(), state)
    assert state.mem == [42]
    assert not state.outted


def test_in_on_unreadable_stream_is_noop():
    class Broken:
        def read(self, n):
            raise OSError('closed')

    state = State(mem=[9])
    Interpreter(stdin=Broken()).execute(In(), state)
    assert state.mem == [9]
    assert not state.outted


def test_in_unknown_char_stores_zero():
    state = State(mem=[5])
    Interpreter(stdin=io.StringIO('€')).execute(In(), state)
    assert state.mem == [0]
    assert state.outted


def test_execute_continues_existing_state():
    state = run('+++>')
    execute(parse('++'), state)
    assert state.mem == [3, 2]
    assert state.pointer == 1


def test_run_from_state_reuses_state(capsys):
    state = run('+' * 72)
    run_from_state('.', state)
    assert capsys.readouterr().out == 'H'
    assert state.reset_outted() is True
    assert state.outted is False
    run_from_state('+', state)
    assert state.mem == [73]
    assert state.outted is False


def test_execute_hand_built_tree():
    program = [Increment(), Increment(), Loop([Forward(), Increment(), Backward(), Decrement()])]
    state = Interpreter().run(program)
    assert state.mem == [0, 2]


def test_debug_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=3, debug_file=str(debug_file))
    interp.run(parse('+[-]'))
    interp.close()
    log = debug_file.read_text()
    assert 'Increment @ 0 = 0' in log
    assert 'loop of 1 instructions ran 1 times' in log
    assert 'done: pointer=0 cells=1 outted=False' in log


def test_out_on_closed_stream_is_noop():
    closed = io.StringIO()
    closed.close()
    state = State(mem=[65])
    Interpreter(stdout=closed).execute(Out(), state)
    assert state.mem == [65]
    assert state.outted


def test_in_reads_space_as_0x20():
    state = Interpreter(stdin=io.StringIO(' ')).run(parse(','))
    assert state.mem == [0x20]
