"""
Entry point for the `rollups-node` command-line interface.

The node launches the rollups auxiliary servers (GraphQL, inspect,
authority claimer) as child processes and supervises them until it is
asked to shut down.
"""


def main():
    """Main entry point for the rollups-node CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
