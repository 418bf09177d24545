from togo.cli.main import run

run()
