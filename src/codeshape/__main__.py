from codeshape.cli import app

app()
