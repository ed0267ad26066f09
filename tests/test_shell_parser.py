import pytest

from shline import ParseError, build_argv, expand_word
from shline.diagnostics import DiagnosticKind
from shline.nodes import NodeKind, RedirectOp, Span
from shline.shell_parser import parse, parse_with_diagnostics

SAMPLE_LINES = [
    "cp -r src/ dest/",
    "cat /etc/passwd",
    'journalctl -u nginx.service --since "1 hour ago"',
    "tar -czvf backup.tar.gz /etc /home/user",
    "chmod --changes --recursive 755 /usr/local/bin",
    'find /home --maxdepth 3 --name "*.pdf" --type f',
    'grep --recursive --ignore-case --line-number --color=always "error" /var/www',
    "docker run --detach --name=mycontainer --publish=8080:80 nginx:latest",
    'ssh -o "ProxyCommand=nc -x 127.0.0.1:1080 %h %p" user@host',
    'curl --header="Authorization: Bearer abc123== " --silent https://api.example.com',
    'systemd-run --unit="one-shot.job" --property="TimeoutStartSec=30s" /usr/bin/echo "done"',
    "command-name -x -y value -z | another-command positional0 --y value-for-y positional1"
    " | yet-anoter-command $POSITIONAL_VALUE_FROM_CONTEXT --foo $lowercase_value_from_context",
    'echo "A mix: $HOME and ${USER} and literal $ notvar" > out.txt',
    "cat input.txt 2>&1 | grep error &> combined.log",
]


@pytest.mark.parametrize("line", SAMPLE_LINES)
def test_parse_sample_lines_cleanly(line):
    result = parse_with_diagnostics(line)
    assert result.clean
    assert len(result.pipeline.commands) == line.count("|") + 1
    assert all(command.words for command in result.pipeline.commands)


def test_parse_pipeline_empty_returns_no_commands():
    assert parse("\n").commands == ()
    assert parse("").commands == ()


def test_parse_pipeline_order():
    pipeline = parse("a | b | c")
    assert pipeline.kind is NodeKind.PIPELINE
    assert [build_argv(command) for command in pipeline.commands] == [["a"], ["b"], ["c"]]
    assert pipeline.commands[1].span == Span(4, 5)
    assert pipeline.span == Span(0, 9)


def test_parse_option_flags_are_plain_words():
    command = parse("mkdir --parents --mode=0755 dir").commands[0]
    assert build_argv(command) == ["mkdir", "--parents", "--mode=0755", "dir"]
    assert command.redirections == ()


def test_parse_output_redirection():
    command = parse("a > out.txt").commands[0]
    assert len(command.redirections) == 1
    redirection = command.redirections[0]
    assert redirection.op is RedirectOp.OUTPUT
    assert redirection.fd == 1
    assert expand_word(redirection.target, {}) == "out.txt"
    assert redirection.span == Span(2, 11)


def test_parse_dup_redirection():
    result = parse_with_diagnostics("cat f 2>&1")
    command = result.pipeline.commands[0]
    assert len(command.words) == 2
    (redirection,) = command.redirections
    assert redirection.op is RedirectOp.DUP
    assert redirection.fd == 2
    assert redirection.dup_target_fd == 1
    assert redirection.is_dup
    assert redirection.target.is_empty
    assert result.clean


def test_parse_dup_without_target_digits():
    result = parse_with_diagnostics("cmd 2>& file")
    (redirection,) = result.pipeline.commands[0].redirections
    assert redirection.op is RedirectOp.DUP
    assert redirection.dup_target_fd is None
    assert expand_word(redirection.target) == "file"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.MISSING_DUP_TARGET]


def test_parse_redirection_defaults():
    command = parse("sort < in.txt >> out.txt 2> err.txt 3>> log &> all").commands[0]
    shapes = [(r.op, r.fd, expand_word(r.target)) for r in command.redirections]
    assert shapes == [
        (RedirectOp.INPUT, 0, "in.txt"),
        (RedirectOp.APPEND, 1, "out.txt"),
        (RedirectOp.OUTPUT, 2, "err.txt"),
        (RedirectOp.APPEND, 3, "log"),
        (RedirectOp.CLOBBER, 1, "all"),
    ]
    assert command.redirections[3].append
    assert command.redirections[4].source_fds == (1, 2)
    assert command.redirections[0].source_fds == (0,)


def test_parse_words_and_redirections_keep_order():
    command = parse("a > f b").commands[0]
    assert build_argv(command) == ["a", "b"]
    assert command.redirections[0].span == Span(2, 5)
    assert command.span == Span(0, 7)


def test_parse_missing_redirection_target():
    result = parse_with_diagnostics("echo hi >")
    (redirection,) = result.pipeline.commands[0].redirections
    assert redirection.target.is_empty
    assert redirection.target.span == Span(9, 9)
    assert expand_word(redirection.target) == ""
    (diagnostic,) = result.diagnostics
    assert diagnostic.kind is DiagnosticKind.MISSING_REDIRECT_TARGET
    assert diagnostic.span == Span(8, 9)


def test_parse_missing_target_before_pipe():
    result = parse_with_diagnostics("a > | b")
    assert len(result.pipeline.commands) == 2
    assert result.pipeline.commands[0].redirections[0].target.is_empty
    assert result.diagnostics[0].kind is DiagnosticKind.MISSING_REDIRECT_TARGET


def test_parse_redirection_without_command():
    command = parse("> out.txt").commands[0]
    assert command.words == ()
    assert len(command.redirections) == 1


def test_parse_trailing_pipe_keeps_empty_command():
    result = parse_with_diagnostics("echo hi |")
    assert len(result.pipeline.commands) == 2
    assert result.pipeline.commands[1].is_empty
    assert result.pipeline.commands[1].span == Span(9, 9)
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.EMPTY_COMMAND]


def test_parse_consecutive_pipes():
    pipeline = parse("a||b")
    assert [build_argv(command) for command in pipeline.commands] == [["a"], [], ["b"]]


def test_parse_quoted_pipe_is_not_a_separator():
    pipeline = parse("echo 'a | b' \"c | d\"")
    assert len(pipeline.commands) == 1
    assert build_argv(pipeline.commands[0]) == ["echo", "a | b", "c | d"]


def test_parse_unterminated_quote_is_tolerated():
    result = parse_with_diagnostics("echo 'oops | grep x")
    assert build_argv(result.pipeline.commands[0]) == ["echo", "oops | grep x"]
    assert result.diagnostics[0].kind is DiagnosticKind.UNTERMINATED_SINGLE_QUOTE


def test_parse_strict_raises_on_recovery():
    with pytest.raises(ValueError):
        parse("echo hi >", strict=True)
    with pytest.raises(ParseError) as exc:
        parse_with_diagnostics("a | | b", strict=True)
    assert exc.value.diagnostics[0].kind is DiagnosticKind.EMPTY_COMMAND


def test_parse_strict_accepts_clean_input():
    assert len(parse("cat f 2>&1 | wc -l", strict=True).commands) == 2
