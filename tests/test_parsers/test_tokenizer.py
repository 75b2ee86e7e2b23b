import pytest

from optline.exceptions import ArgumentFileError, IllegalOptionNameError, OptionNameError
from optline.parser.tokenizer import ArgTokenizer, tokenize
from optline.parser.tokens import BareValue, OptionName, OptionNameWithValue


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("--input", OptionName("input")),
        ("--input=a.txt", OptionNameWithValue("input", "a.txt")),
        ("--input=a=b", OptionNameWithValue("input", "a=b")),
        ("-i", OptionName("i")),
        ("-i=a.txt", OptionNameWithValue("i", "a.txt")),
        ("-ia.txt", OptionNameWithValue("i", "a.txt")),
        ("value", BareValue("value")),
        ("value with spaces", BareValue("value with spaces")),
        ("-5", BareValue("-5")),
        ("-3.14", BareValue("-3.14")),
        ("-1e3", BareValue("-1e3")),
        ("-.5", BareValue("-.5")),
    ],
)
def test_tokenize(raw, expected):
    assert tokenize(raw) == expected


@pytest.mark.parametrize("raw", ["-", "--", "---x", "-=x", "--=x", "--name=", "-n=", "--a b"])
def test_tokenize_illegal(raw):
    with pytest.raises(IllegalOptionNameError):
        tokenize(raw)


def test_tokenize_empty():
    with pytest.raises(OptionNameError):
        tokenize("")


def test_tokenizer_yields_tokens_in_order():
    tokenizer = ArgTokenizer(["--a", "1", "-b2", "--c=3"])
    assert list(tokenizer) == [
        OptionName("a"),
        BareValue("1"),
        OptionNameWithValue("b", "2"),
        OptionNameWithValue("c", "3"),
    ]


def test_tokenizer_peek_does_not_consume():
    tokenizer = ArgTokenizer(["--a", "1"])
    assert tokenizer.peek() == OptionName("a")
    assert tokenizer.peek() == OptionName("a")
    assert next(tokenizer) == OptionName("a")
    assert tokenizer.has_next()
    assert next(tokenizer) == BareValue("1")
    assert not tokenizer.has_next()
    with pytest.raises(IndexError):
        tokenizer.peek()


def test_tokenizer_stops_at_failure_and_keeps_remaining():
    tokenizer = ArgTokenizer(["--a", "1", "--", "2", "--b"])
    assert next(tokenizer) == OptionName("a")
    assert next(tokenizer) == BareValue("1")
    with pytest.raises(IllegalOptionNameError):
        next(tokenizer)
    assert not tokenizer.has_next()
    assert tokenizer.take_remaining() == ["--", "2", "--b"]
    assert tokenizer.take_remaining() == []


def test_tokenizer_take_remaining_includes_peeked():
    tokenizer = ArgTokenizer(["--a", "1", "2"])
    next(tokenizer)
    tokenizer.peek()
    assert tokenizer.take_remaining() == ["1", "2"]


def test_arg_file_is_spliced_in_place(tmp_path):
    arg_file = tmp_path / "args.txt"
    arg_file.write_text("--flag\nvalue with spaces\n")
    tokenizer = ArgTokenizer(["--before", f"@{arg_file}", "--after"])
    assert list(tokenizer) == [
        OptionName("before"),
        OptionName("flag"),
        BareValue("value with spaces"),
        OptionName("after"),
    ]


def test_arg_file_skips_blank_and_comment_lines(tmp_path):
    arg_file = tmp_path / "args.txt"
    arg_file.write_text("# a comment\n\n   --flag   \n\t\nvalue\n")
    assert list(ArgTokenizer([f"@{arg_file}"])) == [OptionName("flag"), BareValue("value")]


def test_arg_files_nest(tmp_path):
    inner = tmp_path / "inner.txt"
    inner.write_text("--inner\n1\n")
    outer = tmp_path / "outer.txt"
    outer.write_text(f"--outer\n@{inner}\n2\n")
    assert list(ArgTokenizer([f"@{outer}", "3"])) == [
        OptionName("outer"),
        OptionName("inner"),
        BareValue("1"),
        BareValue("2"),
        BareValue("3"),
    ]


def test_self_referencing_arg_file_is_rejected(tmp_path):
    arg_file = tmp_path / "loop.txt"
    arg_file.write_text(f"--flag\n@{arg_file}\n")
    tokenizer = ArgTokenizer([f"@{arg_file}"])
    assert next(tokenizer) == OptionName("flag")
    with pytest.raises(ArgumentFileError, match="includes itself"):
        next(tokenizer)


def test_mutually_referencing_arg_files_are_rejected(tmp_path):
    first = tmp_path / "first.txt"
    second = tmp_path / "second.txt"
    first.write_text(f"@{second}\n")
    second.write_text(f"@{first}\n")
    with pytest.raises(ArgumentFileError, match="includes itself"):
        list(ArgTokenizer([f"@{first}"]))


def test_arg_file_depth_limit(tmp_path):
    files = [tmp_path / f"file{i}.txt" for i in range(4)]
    for current, following in zip(files, files[1:]):
        current.write_text(f"@{following}\n")
    files[-1].write_text("value\n")

    assert list(ArgTokenizer([f"@{files[0]}"], max_arg_file_depth=4)) == [BareValue("value")]
    with pytest.raises(ArgumentFileError, match="nested more than 3"):
        list(ArgTokenizer([f"@{files[0]}"], max_arg_file_depth=3))


def test_missing_arg_file(tmp_path):
    missing = tmp_path / "missing.txt"
    tokenizer = ArgTokenizer(["--a", f"@{missing}", "--b"])
    assert next(tokenizer) == OptionName("a")
    with pytest.raises(ArgumentFileError, match="Couldn't load arguments file"):
        next(tokenizer)
    assert tokenizer.take_remaining() == [f"@{missing}", "--b"]


def test_arg_file_with_invalid_utf8(tmp_path):
    arg_file = tmp_path / "binary.txt"
    arg_file.write_bytes(b"--name\n\xff\xfe bad\n")
    tokenizer = ArgTokenizer(["--a", f"@{arg_file}", "--b"])
    assert next(tokenizer) == OptionName("a")
    with pytest.raises(ArgumentFileError, match="not valid UTF-8"):
        next(tokenizer)
    assert tokenizer.take_remaining() == [f"@{arg_file}", "--b"]


def test_missing_nested_arg_file_keeps_outer_remainder(tmp_path):
    missing = tmp_path / "missing.txt"
    outer = tmp_path / "outer.txt"
    outer.write_text(f"--x\n@{missing}\n1\n")
    tokenizer = ArgTokenizer([f"@{outer}", "--y"])
    assert next(tokenizer) == OptionName("x")
    with pytest.raises(ArgumentFileError):
        next(tokenizer)
    assert tokenizer.take_remaining() == [f"@{missing}", "1", "--y"]


def test_empty_arg_file_is_skipped(tmp_path):
    arg_file = tmp_path / "empty.txt"
    arg_file.write_text("# nothing here\n")
    assert list(ArgTokenizer([f"@{arg_file}", "--a"])) == [OptionName("a")]


def test_arg_file_expansion_can_be_disabled(tmp_path):
    assert list(ArgTokenizer(["@file"], arg_file_prefix=None)) == [BareValue("@file")]


def test_bare_prefix_is_a_value():
    assert list(ArgTokenizer(["@"])) == [BareValue("@")]
