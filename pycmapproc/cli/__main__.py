from . import Run

Run()
