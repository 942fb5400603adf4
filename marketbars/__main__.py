from marketbars.cli.main import app

app(prog_name="marketbars")
