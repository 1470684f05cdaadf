from xmlvalidator.cli import app

app(prog_name="xml-validator")
