"""python -m linear_agent 진입점"""

from linear_agent.cli.app import cli

if __name__ == "__main__":
    cli()
