# src/clip_aggregator/__main__.py
from .main import app

app(prog_name="clagr")
