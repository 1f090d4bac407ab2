from argparse import ArgumentParser
import logging
import sys

from podsmith import PodsmithError
from podsmith.details.tools.install import install_main
from podsmith.details.tools.plan import plan_main
from podsmith.details.workspace import Workspace


def main():
    COMMANDS = {
        "install": install_main,
        "plan": plan_main,
    }
    # parse common arguments...
    parser = ArgumentParser(prog="podsmith")
    parser.add_argument("command", choices=COMMANDS.keys())
    parser.add_argument("--manifest", type=str, required=True)
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("targets", default=[], nargs="*")
    args, unknown_args = parser.parse_known_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )
    try:
        workspace = Workspace.load(args.manifest)
        # Pass workspace, config, and unknown args to the command
        exit_code = COMMANDS[args.command](
            workspace=workspace,
            config=workspace.config,
            top_level_targets=args.targets,
            command_args=unknown_args,
        )
    except (PodsmithError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
