from irs_error_parser.cli import app

app(prog_name="irs-error-parser")
