"""Tests for scanning/lexer.py and scanning/walker.py."""

from javastyle.scanning.lexer import Channel, RawToken, comment_channel, tokenize
from javastyle.scanning.treesitter_parser import JavaParser
from javastyle.scanning.walker import WalkEvent, iter_leaves, walk


def lex(source: str) -> list[RawToken]:
    code = source.encode("utf-8")
    return tokenize(JavaParser().parse(code), code)


class TestTokenize:
    """Test the token stream derived from the parse tree."""

    def test_tokens_reproduce_source(self):
        """Concatenated token texts are exactly the source."""
        source = (
            "package demo;\n"
            "\n"
            "/** Doc. */\n"
            "public class Sample {\n"
            "\t// note\n"
            "    private String label = \"a  b\";   \n"
            "    /* block\n"
            "       comment */\n"
            "}\n"
        )
        tokens = lex(source)
        assert "".join(t.text for t in tokens) == source

    def test_strictly_increasing_offsets(self):
        """Tokens are in lexical order without overlap."""
        tokens = lex("class Sample {\n    int value = 1 + 2;\n}\n")
        for before, after in zip(tokens, tokens[1:]):
            assert before.end_byte == after.start_byte

    def test_simple_line(self):
        """A one-line class yields code and whitespace tokens in order."""
        tokens = lex("class Sample { }")
        assert [t.text for t in tokens] == ["class", " ", "Sample", " ", "{", " ", "}"]
        assert [t.channel for t in tokens] == [
            Channel.CODE,
            Channel.WHITESPACE,
            Channel.CODE,
            Channel.WHITESPACE,
            Channel.CODE,
            Channel.WHITESPACE,
            Channel.CODE,
        ]
        assert all(t.line == 1 for t in tokens)

    def test_gap_split_at_last_newline(self):
        """Line breaks stay on the first line, indentation moves to the next leaf's line."""
        tokens = lex("class Sample {\n\n    int value;\n}\n")
        whitespace = [t for t in tokens if t.channel is Channel.WHITESPACE]
        head = next(t for t in whitespace if t.text == "\n\n")
        tail = next(t for t in whitespace if t.text == "    ")
        assert head.line == 1
        assert tail.line == 3

    def test_blank_lines_have_no_tokens(self):
        """Blank lines carry no tokens."""
        tokens = lex("class Sample {\n\n\n    int value;\n}\n")
        assert {t.line for t in tokens} == {1, 4, 5}

    def test_whitespace_type_code(self):
        """Synthesized tokens use the whitespace type code."""
        tokens = lex("class Sample { }")
        assert all(
            t.type_code == "whitespace" for t in tokens if t.channel is Channel.WHITESPACE
        )

    def test_string_literal_is_single_token(self):
        """String literals are never split into fragments."""
        tokens = lex('class Sample { String text = "a, b; c"; }')
        strings = [t for t in tokens if t.type_code == "string_literal"]
        assert [t.text for t in strings] == ['"a, b; c"']

    def test_comment_channels(self):
        """Line and block comments go to COMMENT, /** */ to DOC_COMMENT."""
        tokens = lex("// line\n/* block */\n/** doc */\nclass Sample { }\n")
        comments = [t for t in tokens if t.channel in (Channel.COMMENT, Channel.DOC_COMMENT)]
        assert [(t.text, t.channel) for t in comments] == [
            ("// line", Channel.COMMENT),
            ("/* block */", Channel.COMMENT),
            ("/** doc */", Channel.DOC_COMMENT),
        ]

    def test_empty_source(self):
        """An empty file has no tokens."""
        assert lex("") == []

    def test_multiline_comment_line(self):
        """A block comment is reported on the line it starts on."""
        tokens = lex("/*\n * header\n */\nclass Sample { }\n")
        assert tokens[0].line == 1
        assert tokens[0].text.endswith("*/")
        keyword = next(t for t in tokens if t.text == "class")
        assert keyword.line == 4


class TestCommentChannel:
    """Test comment channel selection."""

    def test_doc_comment(self):
        assert comment_channel("/** Adds. */") is Channel.DOC_COMMENT

    def test_empty_block_comment_is_not_doc(self):
        """/**/ is an empty block comment, not a doc comment."""
        assert comment_channel("/**/") is Channel.COMMENT

    def test_line_comment(self):
        assert comment_channel("//** not doc") is Channel.COMMENT


class TestWalk:
    """Test the enter/exit event stream."""

    def test_events_balanced(self):
        """Every node is entered and exited once, the root first and last."""
        tree = JavaParser().parse(b"class Sample { void run() { int value = 1; } }")
        events = list(walk(tree.root_node))
        enters = [node for event, node in events if event is WalkEvent.ENTER]
        exits = [node for event, node in events if event is WalkEvent.EXIT]
        assert len(enters) == len(exits)
        assert events[0][0] is WalkEvent.ENTER
        assert events[0][1].type == "program"
        assert events[-1][0] is WalkEvent.EXIT
        assert events[-1][1].type == "program"

    def test_nesting(self):
        """Children are entered and exited between their parent's events."""
        tree = JavaParser().parse(b"class Sample { }")
        depth = 0
        for event, _ in walk(tree.root_node):
            depth += 1 if event is WalkEvent.ENTER else -1
            assert depth >= 0
        assert depth == 0

    def test_leaves_in_document_order(self):
        """iter_leaves yields non-empty leaves left to right."""
        tree = JavaParser().parse(b'class Sample { String text = "x"; }')
        leaves = list(iter_leaves(tree.root_node))
        assert [leaf.type for leaf in leaves][:3] == ["class", "identifier", "{"]
        assert "string_fragment" not in [leaf.type for leaf in leaves]
        offsets = [leaf.start_byte for leaf in leaves]
        assert offsets == sorted(offsets)
