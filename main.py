from js2ts.cli import cli

if __name__ == "__main__":
    cli()   # noqa: E305
