"""pocketbook: multi-user personal finance tracking from the command line."""

__version__ = "0.1.0"


def __getattr__(name):
    # cli.main imports every command module, so only load it on demand
    if name == "main":
        from pocketbook.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
