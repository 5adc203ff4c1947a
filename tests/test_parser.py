"""
Parser tests - arguments and directive dispatch

Tests bracket-aware argument parsing over the token tuple, command
lookup, arity checks and block location.
"""

import pytest

from buildjs.lib.commands import CommandRegistry
from buildjs.lib.lexer import tokens_make
from buildjs.lib.parser import Parser
from buildjs.models.commands import CommandSpec
from buildjs.models.errors import ArityError, InvalidCommandError, UnmatchedTokenError


def calls(body, parser=None):
    parser = parser or Parser()
    return [(i.spec.name, i.args) for i in parser.parse(body)]


class TestArgumentParse:
    """Test consuming a single argument at a cursor"""

    def test_stops_at_blank(self):
        """A plain argument ends at the first blank"""
        parser = Parser()
        tokens = tokens_make("abc def")
        argument = parser.argument_parse(tokens, 0)
        assert argument.text == "abc"
        assert argument.cursor == 1

    def test_blank_inside_brackets(self):
        """Blanks inside an open bracket belong to the argument"""
        parser = Parser()
        tokens = tokens_make("(a b) c")
        argument = parser.argument_parse(tokens, 0)
        assert argument.text == "(a b)"
        assert argument.cursor == 5

    def test_starts_at_cursor(self):
        """Parsing starts at the cursor and leaves the tuple untouched"""
        parser = Parser()
        tokens = tokens_make("x [1, 2]")
        argument = parser.argument_parse(tokens, 2)
        assert argument.text == "[1, 2]"
        assert argument.cursor == len(tokens)
        assert "".join(t.value for t in tokens) == "x [1, 2]"

    def test_mixed_brackets(self):
        """Each bracket kind is balanced independently"""
        parser = Parser()
        tokens = tokens_make("{a: [1, (2 + 3)]} rest")
        assert parser.argument_parse(tokens, 0).text == "{a: [1, (2 + 3)]}"

    def test_argument_runs_to_end(self):
        """Without a blank the argument takes all remaining tokens"""
        parser = Parser()
        tokens = tokens_make("a.b(c)")
        argument = parser.argument_parse(tokens, 0)
        assert argument.text == "a.b(c)"
        assert argument.cursor == len(tokens)

    @pytest.mark.parametrize("text,bracket", [
        ("(a b", "("),
        ("[a", "["),
        ("{ x: 1", "{"),
    ])
    def test_unmatched_opening_bracket(self, text, bracket):
        """An unclosed bracket names the bracket in the error"""
        parser = Parser()
        with pytest.raises(UnmatchedTokenError, match=f"Unmatched token '\\{bracket}'") as info:
            parser.argument_parse(tokens_make(text), 0)
        assert info.value.token == bracket

    def test_extra_closing_bracket_not_reported(self):
        """A counter below zero is accepted"""
        parser = Parser()
        argument = parser.argument_parse(tokens_make("a) b"), 0)
        assert argument.text == "a)"

    def test_whitespace_skip(self):
        """whitespace_skip returns the first non-blank index"""
        parser = Parser()
        tokens = tokens_make(" \n\tx")
        assert parser.whitespace_skip(tokens, 0) == 3
        assert parser.whitespace_skip(tokens, 3) == 3
        assert parser.whitespace_skip(tokens, 4) == 4


class TestDirectiveParse:
    """Test turning block bodies into invocations"""

    def test_empty_body(self):
        """Empty or blank body gives no invocations"""
        assert calls("") == []
        assert calls(" \n ") == []

    def test_def(self):
        """@def takes two arguments"""
        assert calls(" @def NAME value ") == [("def", ["NAME", "value"])]

    def test_inc_quoted(self):
        """Quotes are kept by the parser"""
        assert calls(' @inc "lib/a b.js" ') == [("inc", ['"lib/a b.js"'])]

    def test_bracketed_value(self):
        """A bracketed value can contain blanks"""
        assert calls("@def SUM (1 + 2)") == [("def", ["SUM", "(1 + 2)"])]

    def test_several_commands_in_order(self):
        """Invocations keep source order"""
        body = "\n  @def A 1\n  @inc a.js\n  @def B 2\n"
        assert calls(body) == [
            ("def", ["A", "1"]),
            ("inc", ["a.js"]),
            ("def", ["B", "2"]),
        ]

    def test_stray_text_ignored(self):
        """Tokens between commands that are not @names are skipped"""
        assert calls("note: @inc a.js done") == [("inc", ["a.js"])]

    def test_invalid_command(self):
        """Unknown @name fails naming the command"""
        with pytest.raises(InvalidCommandError, match="Invalid command @bogus") as info:
            Parser().parse(" @bogus x ")
        assert info.value.name == "bogus"

    def test_bare_at_sign_is_invalid(self):
        """An @ with no name is an invalid command, not stray text"""
        with pytest.raises(InvalidCommandError, match="Invalid command @$") as info:
            Parser().parse(" @ def A 1 ")
        assert info.value.name == ""

    def test_invalid_command_fails_whole_block(self):
        """A later invalid command fails the block before anything runs"""
        with pytest.raises(InvalidCommandError):
            Parser().parse("@def A 1 @nope")

    def test_arity_singular_found(self):
        """Two expected, one found"""
        with pytest.raises(ArityError) as info:
            Parser().parse(" @def A\n")
        assert str(info.value) == "Expected 2 arguments for @def, but only 1 was found"
        assert info.value.expected == 2
        assert info.value.found == 1

    def test_arity_singular_expected(self):
        """One expected, none found"""
        with pytest.raises(ArityError) as info:
            Parser().parse("@inc   ")
        assert str(info.value) == "Expected 1 argument for @inc, but only 0 were found"

    def test_arity_plural_found(self):
        """Plural wording when more than one argument was found"""
        registry = CommandRegistry()
        registry.register(CommandSpec(
            name="swap",
            arity=3,
            handler=lambda a, b, c, **context: context["text"],
        ))
        with pytest.raises(ArityError, match="Expected 3 arguments for @swap, but only 2 were found"):
            Parser(registry=registry).parse("@swap a b")

    def test_next_directive_taken_as_argument(self):
        """Arguments are counted, not typed: a directive can be an argument"""
        assert calls("@inc @def") == [("inc", ["@def"])]

    def test_zero_arity_command(self):
        """A command without arguments parses on its own"""
        registry = CommandRegistry()
        registry.register(CommandSpec(name="upper", arity=0, handler=lambda **context: context["text"].upper()))
        assert calls(" @upper @upper ", Parser(registry=registry)) == [("upper", []), ("upper", [])]


class TestBlockFind:
    """Test locating directive blocks in source text"""

    def test_no_block(self):
        """Plain text has no block"""
        assert Parser().block_find("var a = 1; /* comment */") is None

    def test_block_offsets(self):
        """Start, end and body of a block"""
        block = Parser().block_find("x/*buildjs @inc a.js */y")
        assert block.start == 1
        assert block.end == 23
        assert block.body == " @inc a.js "

    def test_non_greedy(self):
        """Two blocks are found separately"""
        parser = Parser()
        text = "/*buildjs @def A 1 */ mid /*buildjs @def B 2 */"
        first = parser.block_find(text)
        second = parser.block_find(text, first.end)
        assert first.body == " @def A 1 "
        assert second.body == " @def B 2 "
        assert text[first.end:second.start] == " mid "

    def test_multiline_block(self):
        """Blocks span lines"""
        block = Parser().block_find("a\n/*buildjs\n@def A 1\n*/\nb")
        assert block.body == "\n@def A 1\n"
