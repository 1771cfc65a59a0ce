import typer

from gitploy.cli.doctor import doctor as doctor_command
from gitploy.cli.run import run as run_command

app = typer.Typer(name="gitploy", help="Clone, commit and push a repository with token auth")
app.command(name="doctor")(doctor_command)
app.command(name="run")(run_command)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
