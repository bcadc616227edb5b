"""
Main entry point for the Order Miner application.
Runs the interactive sync and control panel flow.
"""
from order_miner.cli.app import app


def main():
    """Run the command line application."""
    app()


if __name__ == "__main__":
    main()
