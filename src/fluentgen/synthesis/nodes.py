"""Small libcst constructors shared by the carrier and state renderers."""

from __future__ import annotations

from typing import List, Sequence

import libcst as cst


def blank_lines(count: int) -> List[cst.EmptyLine]:
    return [cst.EmptyLine(indent=False) for _ in range(count)]


def docstring(text: str) -> cst.SimpleStatementLine:
    return cst.SimpleStatementLine([cst.Expr(cst.SimpleString(f'"""{text}"""'))])


def statement(code: str) -> cst.BaseStatement:
    return cst.parse_statement(code)


def param(name: str, hint: str | None = None, default: str | None = None) -> cst.Param:
    return cst.Param(
        name=cst.Name(name),
        annotation=cst.Annotation(cst.parse_expression(hint)) if hint else None,
        default=cst.parse_expression(default) if default is not None else None,
    )


def method(
    name: str,
    params: Sequence[cst.Param],
    returns: str | None,
    body: Sequence[cst.BaseStatement],
    *,
    bound: bool = True,
    decorators: Sequence[str] = (),
    leading: int = 1,
) -> cst.FunctionDef:
    all_params = [cst.Param(cst.Name("self"))] if bound else []
    all_params.extend(params)
    return cst.FunctionDef(
        name=cst.Name(name),
        params=cst.Parameters(params=all_params),
        body=cst.IndentedBlock(body=list(body)),
        returns=cst.Annotation(cst.parse_expression(returns)) if returns else None,
        decorators=[cst.Decorator(cst.parse_expression(d)) for d in decorators],
        leading_lines=blank_lines(leading),
    )


def class_def(
    name: str,
    bases: Sequence[str],
    body: Sequence[cst.BaseStatement],
    *,
    leading: int = 1,
) -> cst.ClassDef:
    return cst.ClassDef(
        name=cst.Name(name),
        bases=[cst.Arg(cst.parse_expression(base)) for base in bases],
        body=cst.IndentedBlock(body=list(body)),
        leading_lines=blank_lines(leading),
    )
