import logging
from pathlib import Path
from typing import Optional

import typer

from tinycompiler.compiler import compile_expression, run_compiled
from tinycompiler.errors import CompilerError
from tinycompiler.executor import ModuleExecutor, UnitNamer

app = typer.Typer(add_completion=False, help="Compile an arithmetic expression into a python unit and run it")


@app.command()
def main(
    expression: Optional[str] = typer.Argument(None, help='Expression to compile, e.g. "(1+2)*3 - 4/2"'),
    show_source: bool = typer.Option(
        True, "--show-source/--no-show-source", help="Print the generated module source"
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir",
        "-o",
        envvar="TINYCOMPILER_OUTPUT_DIR",
        help="Write compiled units to this directory instead of keeping them in memory",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every compilation stage"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if expression is None:
        typer.echo('Usage: tinycompiler "expression"')
        typer.echo('Example: tinycompiler "(1+2)*3 - 4/2"')
        raise typer.Exit()

    namer = UnitNamer()
    try:
        compiled = compile_expression(expression, unit_name=namer.next_name())
        if show_source:
            typer.echo(f"Generated source:\n{compiled.source}")
        result = run_compiled(compiled, ModuleExecutor(output_dir=output_dir))
    except CompilerError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Result = {result}")


if __name__ == "__main__":
    app()
