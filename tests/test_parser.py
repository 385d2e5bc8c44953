import pytest

from cwf_compiler.errors import ModelError, ParseError
from cwf_compiler.models import Message, Operation, TypeTag
from cwf_compiler.parser.cwf_parser import CwfParser

ECHO = """\
operation Echo {
  in: Req {
    a string(3);
    b int(2);
  }
  out: Resp {
    c decimal(4,1);
  }
}
"""

PAYMENT = """\
// card payment request
operation Payment {
  in: PaymentReq {
    account string(12);
    amount decimal(9,2);   /* cents */
    currency string(3);
    installments int(2);
  }
  out: PaymentResp {
    code int(3);
    balance decimal(11,2);
    text string(40);
  }
}
"""


def _parse(text):
    return CwfParser(text, "test.cwf").parse()


class TestOperation:
    def test_echo_example(self):
        op = _parse(ECHO)
        assert isinstance(op, Operation)
        assert op.name == "Echo"
        assert op.input.name == "Req"
        assert op.output.name == "Resp"

        a, b = op.input.fields
        assert (a.name, a.type, a.position, a.width) == ("a", TypeTag.STRING, 0, 3)
        assert (b.name, b.type, b.position, b.width) == ("b", TypeTag.INT, 3, 2)
        assert op.input.length == 5

        (c,) = op.output.fields
        assert (c.name, c.type, c.position, c.width, c.decimal_digits) == (
            "c", TypeTag.DECIMAL, 0, 4, 1,
        )
        assert op.output.length == 4

    def test_offsets_are_prefix_sums(self):
        op = _parse(PAYMENT)
        for message in (op.input, op.output):
            fields = message.fields
            assert fields[0].position == 0
            for prev, cur in zip(fields, fields[1:]):
                assert cur.position == prev.position + prev.width
            assert message.length == fields[-1].position + fields[-1].width

        assert [f.position for f in op.input.fields] == [0, 12, 21, 24]
        assert op.input.length == 26
        assert op.output.length == 54

    def test_declaration_order_preserved(self):
        op = _parse(PAYMENT)
        assert [f.name for f in op.output.fields] == ["code", "balance", "text"]

    def test_duplicate_field_names_allowed(self):
        op = _parse("operation X { in: A { f int(1); f int(2); } out: B { g string(1); } }")
        assert [f.name for f in op.input.fields] == ["f", "f"]
        assert op.input.fields[1].position == 1

    def test_non_decimal_fields_have_no_digits(self):
        op = _parse(ECHO)
        assert op.input.fields[0].decimal_digits == 0


class TestHooks:
    def test_hooks_fire_in_parse_order(self):
        events = []
        parser = CwfParser(
            ECHO,
            on_message=lambda m: events.append(("message", m.name)),
            on_operation=lambda o: events.append(("operation", o.name)),
        )
        parser.parse()
        assert events == [("message", "Req"), ("message", "Resp"), ("operation", "Echo")]

    def test_operation_hook_not_called_on_error(self):
        events = []
        broken = ECHO.replace("c decimal(4,1);", "c decimal(4,1)")
        parser = CwfParser(
            broken,
            on_message=lambda m: events.append(m.name),
            on_operation=lambda o: events.append(o.name),
        )
        with pytest.raises(ParseError):
            parser.parse()
        assert events == ["Req"]

    def test_parsers_do_not_share_state(self):
        first = CwfParser(ECHO).parse()
        second = CwfParser(PAYMENT).parse()
        assert first.input.name == "Req"
        assert second.input.name == "PaymentReq"
        assert first == CwfParser(ECHO).parse()


class TestBareMessage:
    def test_message_unit(self):
        msg = _parse("message Header { id int(4); name string(10); }")
        assert isinstance(msg, Message)
        assert msg.name == "Header"
        assert msg.length == 14

    def test_message_hook_fires_once(self):
        seen = []
        CwfParser("message H { id int(4); }", on_message=seen.append).parse()
        assert [m.name for m in seen] == ["H"]


class TestSyntaxErrors:
    def test_missing_semicolon(self):
        broken = ECHO.replace("b int(2);", "b int(2)")
        with pytest.raises(ParseError) as exc:
            _parse(broken)
        assert exc.value.line == 5
        assert exc.value.col == 3
        assert str(exc.value) == "test.cwf:5:3: expected ';', found '}'"

    def test_empty_message_rejected(self):
        with pytest.raises(ParseError) as exc:
            _parse("operation X { in: A { } out: B { g int(1); } }")
        assert "expected identifier, found '}'" in str(exc.value)

    def test_unknown_field_type(self):
        with pytest.raises(ParseError) as exc:
            _parse("message A { f float(3); }")
        assert "expected field type, found identifier 'float'" in str(exc.value)

    def test_decimal_requires_digits(self):
        with pytest.raises(ParseError) as exc:
            _parse("message A { f decimal(3); }")
        assert "expected ','" in str(exc.value)

    def test_int_rejects_digits(self):
        with pytest.raises(ParseError) as exc:
            _parse("message A { f int(3,1); }")
        assert "expected ')', found ','" in str(exc.value)

    def test_non_ascii_width(self):
        with pytest.raises(ParseError) as exc:
            _parse("message A { f int(\u00b2); }")
        assert str(exc.value) == "test.cwf:1:19: unexpected character '\u00b2'"

    def test_unit_must_start_with_keyword(self):
        with pytest.raises(ParseError) as exc:
            _parse("Req { a int(1); }")
        assert "expected 'operation' or 'message'" in str(exc.value)

    def test_trailing_input_rejected(self):
        with pytest.raises(ParseError) as exc:
            _parse("message A { f int(1); } message B { g int(1); }")
        assert "expected end of input, found 'message'" in str(exc.value)

    def test_missing_out_section(self):
        with pytest.raises(ParseError) as exc:
            _parse("operation X { in: A { f int(1); } }")
        assert "expected 'out'" in str(exc.value)


class TestFieldValidation:
    def test_decimal_digits_must_fit_width(self):
        with pytest.raises(ModelError) as exc:
            _parse("message A {\n  ok int(2);\n  amount decimal(2,2);\n}")
        assert exc.value.line == 3
        assert exc.value.col == 3
        assert "decimal field 'amount'" in str(exc.value)

    def test_zero_width_rejected(self):
        with pytest.raises(ModelError) as exc:
            _parse("message A { f string(0); }")
        assert "at least 1 character wide" in str(exc.value)

    def test_decimal_without_fraction_allowed(self):
        msg = _parse("message A { f decimal(5,0); }")
        assert msg.fields[0].decimal_digits == 0
