"""Frame orchestration and rendering around the interpreter core."""
