from monkey.ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression,
)
from monkey.interpreter import Interpreter
from monkey.lexer import Lexer
from monkey.parser import Parser, parse_program
from monkey.types import to_string


def parse_clean(source):
    program, errors = parse_program(source)
    assert errors == []
    return program


def test_let_statements():
    program = parse_clean("""
        let x = 5;
        let y = true;
        let foobar = y;
    """)
    assert program.statements == (
        LetStatement(Identifier('x'), IntegerLiteral(5)),
        LetStatement(Identifier('y'), BooleanLiteral(True)),
        LetStatement(Identifier('foobar'), Identifier('y')),
    )


def test_return_statements():
    program = parse_clean("return 5; return 10; return add(15);")
    assert len(program.statements) == 3
    assert all(isinstance(s, ReturnStatement) for s in program.statements)
    assert program.statements[2].value == CallExpression(Identifier('add'), (IntegerLiteral(15),))


def test_semicolons_are_optional():
    program = parse_clean("let x = 5\nx")
    assert program.statements == (
        LetStatement(Identifier('x'), IntegerLiteral(5)),
        ExpressionStatement(Identifier('x')),
    )


def test_parser_pulls_from_any_token_source():
    parser = Parser(Lexer("-a * b"))
    program = parser.parse_program()
    assert parser.errors == []
    assert str(program) == "((-a) * b)"


def test_prefix_expressions():
    program = parse_clean("!5; -15; !true;")
    assert program.statements == (
        ExpressionStatement(PrefixExpression('!', IntegerLiteral(5))),
        ExpressionStatement(PrefixExpression('-', IntegerLiteral(15))),
        ExpressionStatement(PrefixExpression('!', BooleanLiteral(True))),
    )


def test_infix_expressions():
    for op in ['+', '-', '*', '/', '>', '<', '==', '!=']:
        program = parse_clean(f"5 {op} 5;")
        assert program.statements == (
            ExpressionStatement(InfixExpression(IntegerLiteral(5), op, IntegerLiteral(5))),
        )


def test_operator_precedence():
    tests = [
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4); ((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true", "true"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("2 / (5 + 5)", "(2 / (5 + 5))"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("-5 + 4", "((-5) + 4)"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        ("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
    ]
    for source, expected in tests:
        assert str(parse_clean(source)) == expected, source


def test_if_expression():
    program = parse_clean("if (x < y) { x }")
    assert program.statements == (
        ExpressionStatement(IfExpression(
            InfixExpression(Identifier('x'), '<', Identifier('y')),
            BlockStatement((ExpressionStatement(Identifier('x')),)),
            None,
        )),
    )


def test_if_else_expression():
    program = parse_clean("if (x < y) { x } else { y }")
    expr = program.statements[0].expression
    assert expr.alternative == BlockStatement((ExpressionStatement(Identifier('y')),))
    assert str(program) == "if ((x < y)) { x } else { y }"


def test_function_literal():
    program = parse_clean("fn(x, y) { x + y; }")
    expr = program.statements[0].expression
    assert isinstance(expr, FunctionLiteral)
    assert expr.parameters == (Identifier('x'), Identifier('y'))
    assert expr.body == BlockStatement((
        ExpressionStatement(InfixExpression(Identifier('x'), '+', Identifier('y'))),
    ))
    assert str(program) == "fn(x, y) { (x + y) }"


def test_function_parameters():
    tests = [
        ("fn() {};", []),
        ("fn(x) {};", ['x']),
        ("fn(x, y, z) {};", ['x', 'y', 'z']),
        ("fn(x, y,) {};", ['x', 'y']),
    ]
    for source, expected in tests:
        expr = parse_clean(source).statements[0].expression
        assert [p.name for p in expr.parameters] == expected, source


def test_call_expression():
    program = parse_clean("add(1, 2 * 3, 4 + 5,);")
    expr = program.statements[0].expression
    assert isinstance(expr, CallExpression)
    assert expr.function == Identifier('add')
    assert [str(a) for a in expr.arguments] == ['1', '(2 * 3)', '(4 + 5)']


def test_empty_program():
    assert parse_clean("") == Program(())


def test_let_errors():
    program, errors = parse_program("let x 5;")
    assert errors == ["expected next token to be ASSIGN, got INT instead at 1:7"]
    assert program.statements == (ExpressionStatement(IntegerLiteral(5)),)


def test_failed_expect_does_not_advance():
    # The unexpected '=' is seen again by the next statement
    program, errors = parse_program("let = 10;")
    assert errors == [
        "expected next token to be IDENT, got ASSIGN instead at 1:5",
        "no prefix parse function for ASSIGN found at 1:5",
    ]
    assert program.statements == (ExpressionStatement(IntegerLiteral(10)),)


def test_errors_are_collected_across_statements():
    _, errors = parse_program("let x 5; let = 10; let 838383;")
    assert "expected next token to be ASSIGN, got INT instead at 1:7" in errors
    assert "expected next token to be IDENT, got ASSIGN instead at 1:14" in errors
    assert "expected next token to be IDENT, got INT instead at 1:24" in errors


def test_no_prefix_parse_function():
    program, errors = parse_program("5 @ 3")
    assert errors == ["no prefix parse function for ILLEGAL found at 1:3"]
    assert len(program.statements) == 2


def test_bad_parameter_list():
    _, errors = parse_program("fn(x, 1) { x }")
    assert errors[0] == "expected next token to be IDENT, got INT instead at 1:7"


def test_unterminated_block():
    program, errors = parse_program("if (x) { x")
    assert errors == ["expected next token to be RBRACE, got EOF instead at 1:11"]
    assert program.statements == ()


def test_missing_closing_paren():
    _, errors = parse_program("(1 + 2")
    assert errors == ["expected next token to be RPAREN, got EOF instead at 1:7"]


def test_rendering_reparses_to_the_same_program():
    sources = [
        "let a = 5; let b = a; let c = a + b + 5; c;",
        "let newAdder = fn(x) { fn(y) { x + y; }; }; let addTwo = newAdder(2); addTwo(3);",
        "if (10 > 1) { if (10 > 1) { return 10; } return 1; }",
        "let f = fn(n) { if (n < 2) { n } else { f(n - 1) + f(n - 2) } }; f(10)",
        "(5 + 10 * 2 + 15 / 3) * 2 + -10",
        "fn(x) { x * 2 }(21); !!true; if (1) { } else { 2 }",
        "1 + 2; 3 + 4",
    ]
    for source in sources:
        program = parse_clean(source)
        reparsed = parse_clean(str(program))
        assert reparsed == program, source
        assert str(reparsed) == str(program)
        first = Interpreter().run(program)
        second = Interpreter().run(reparsed)
        assert to_string(first) == to_string(second)
