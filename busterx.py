import argparse
import asyncio
import sys

from termcolor import colored, cprint
from tqdm.contrib.logging import logging_redirect_tqdm

from core.coordinator import DEFAULT_TIMEOUT, RunCoordinator, validate_mode_options
from core.dispatcher import DEFAULT_THREADS
from core.exceptions import BusterError
from core.modes import Mode
from core.utils import normalize_target, setup_logging
from core.wordlists import load_extensions, load_user_agents, load_wordlist, parse_headers
from reports.reporter import Reporter

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="busterx",
        description=f"{colored('BusterX: Directory buster tool', 'magenta', attrs=['bold'])}\n"
                    f"{colored('Concurrent directory, fuzzing, virtual host and subdomain discovery.', 'white')}",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument(
        "mode",
        choices=[m.value for m in Mode],
        help=f"{colored('Enumeration mode: dir, fuzz, vhost or dns.', 'white')}"
    )
    parser.add_argument(
        "target",
        help=f"{colored('Target URL (e.g., https://example.com). In fuzz mode it must contain {fuzz}.', 'white')}"
    )
    parser.add_argument(
        "-w", "--wordlist",
        required=True,
        help=f"{colored('Wordlist file to use.', 'white')}"
    )
    parser.add_argument(
        "-e", "--extensions",
        help=f"{colored('Extensions file; every line holds a %% replaced by each word (dir and fuzz modes only).', 'white')}"
    )
    parser.add_argument(
        "-x", "--headers",
        action="append",
        metavar="'KEY: VALUE'",
        help=f"{colored('Add a header to every request. Can be repeated.', 'white')}"
    )
    parser.add_argument(
        "-s", "--subdomains",
        action="store_true",
        help=f"{colored('Treat wordlist as subdomains and append the target domain.', 'white')}"
    )
    parser.add_argument(
        "-t", "--threads",
        type=int,
        default=DEFAULT_THREADS,
        help=f"{colored(f'Number of concurrent requests. Default: {DEFAULT_THREADS}.', 'white')}"
    )
    parser.add_argument(
        "-u", "--user-agents",
        help=f"{colored('User agents file; a random one is picked for every request.', 'white')}"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"{colored(f'Per-request timeout in seconds. Default: {DEFAULT_TIMEOUT}.', 'white')}"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help=f"{colored('Disable coloured output.', 'white')}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help=f"{colored('Enable verbose output (more detailed logging).', 'white')}"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help=f"{colored('Show the version and exit.', 'white')}"
    )
    return parser


def print_settings(reporter: Reporter, args, mode: Mode, target: str):
    settings = [("Mode", mode.label), ("Target", target)]
    if args.extensions:
        settings.append(("Extensions", args.extensions))
    if args.headers:
        settings.append(("Headers", args.headers))
    settings.append(("Threads", args.threads))
    settings.append(("Wordlist", args.wordlist))
    if args.user_agents:
        settings.append(("User agents", args.user_agents))
    reporter.settings(settings)


def main(argv=None) -> int:
    """
    Parses arguments, loads the input files and runs BusterX.

    Returns:
        int: Process exit status. 0 once a run completes, whatever it found.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    mode = Mode(args.mode)
    target = normalize_target(args.target)
    reporter = Reporter(use_color=not args.no_color)
    reporter.banner(__version__)
    print_settings(reporter, args, mode, target)

    try:
        # Fail on bad option combinations before touching the filesystem
        validate_mode_options(mode, [args.extensions] if args.extensions else None, args.threads)
        words = load_wordlist(args.wordlist)
        extensions = load_extensions(args.extensions) if args.extensions else None
        user_agents = load_user_agents(args.user_agents)
        headers = parse_headers(args.headers)

        coordinator = RunCoordinator(reporter=reporter, timeout=args.timeout)
        with logging_redirect_tqdm():
            asyncio.run(coordinator.execute(
                mode,
                target,
                words,
                user_agents=user_agents,
                headers=headers,
                concurrency=args.threads,
                extensions=extensions,
                subdomains=args.subdomains,
            ))
    except BusterError as e:
        cprint(f"Error: {e}", "red", attrs=["bold"])
        return 1
    except KeyboardInterrupt:
        cprint("\nInterrupted, pending requests cancelled.", "yellow")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
