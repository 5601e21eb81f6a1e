"""
Main entry point for albumseq
"""

from albumseq.cli import app


def main():
    """Run the command line interface"""
    app()


if __name__ == "__main__":
    main()
