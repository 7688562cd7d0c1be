"""
Main CLI for the power-set tool
"""

import argparse
import logging
import sys
from typing import Any, List, Union
from python_powerset.benchmark import run_benchmark
from python_powerset.powerset import strategies, get_strategy
from python_powerset.verification import verify
from python_powerset.config import update as update_config, get as get_config, load_config_file, to_yaml


def _parse_element(arg: str) -> Union[int, str]:
    try:
        return int(arg)
    except ValueError:
        return arg


def _sort_key(element: Any) -> tuple:
    return (isinstance(element, str), element)


def _command_show_config(args: Any) -> None:
    """Display current effective configuration as YAML."""
    print(to_yaml())


def _command_benchmark(_args: Any) -> None:
    cfg = get_config()
    try:
        run_benchmark(cfg.strategies)
    except ValueError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)


def _command_verify(args: Any) -> None:
    names: List[str] = list(strategies) if args.all else list(get_config().strategies)
    all_passed = True
    for name in names:
        outcome = verify(get_strategy(name))
        for scenario, passed in outcome.items():
            print(f"{name} {scenario}: {'PASS' if passed else 'FAIL'}")
        all_passed = all_passed and all(outcome.values())
    if not all_passed:
        logging.error("Error: some verification scenarios failed")
        sys.exit(1)


def _command_generate(args: Any) -> None:
    name = get_config().strategies[0]
    elements = [_parse_element(e) for e in args.elements]
    try:
        result = list(get_strategy(name)(elements))
    except ValueError as e:
        logging.error(f"Error: {e}")
        sys.exit(1)
    if args.count:
        print(len(result))
        return
    for subset in result:
        print(sorted(subset, key=_sort_key))


def main() -> None:
    parser = argparse.ArgumentParser(description="Power-set generation and benchmarking CLI")
    # specify log level with --log-level, with default WARNING:
    parser.add_argument(
        '--log-level',
        default='WARNING',
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    parser.add_argument(
        '--config-file',
        default=None,
        help="Path to YAML configuration file. If not specified, python-powerset.cfg in current directory will be used if it exists.")
    parser.add_argument(
        '--input-size',
        type=int,
        default=None,
        help="Size of the benchmark input (the integers 1 through N)")
    parser.add_argument(
        '--iterations',
        type=int,
        default=None,
        help="Number of timed runs per strategy")
    parser.add_argument(
        '--strategy',
        action='append',
        default=None,
        help=f"Strategy to use ({list(strategies)}). May be given several times.")

    # subcommands:
    subparsers = parser.add_subparsers(
        dest="command",
        help="sub-command help",
        required=True)

    parser_show_config = subparsers.add_parser(
        'show-config',
        help="Display current effective configuration as YAML")
    parser_show_config.set_defaults(func=_command_show_config)

    parser_benchmark = subparsers.add_parser(
        'benchmark',
        help="Report the mean generation time of each strategy on the integers 1 through N")
    parser_benchmark.set_defaults(func=_command_benchmark)

    parser_verify = subparsers.add_parser(
        'verify',
        help="Check strategies against small known power sets")
    parser_verify.add_argument(
        '--all',
        action='store_true',
        help="Verify every known strategy instead of the configured ones")
    parser_verify.set_defaults(func=_command_verify)

    parser_generate = subparsers.add_parser(
        'generate',
        help="Print the power set of the given elements using the first configured strategy")
    parser_generate.add_argument(
        'elements',
        nargs='*',
        help="Distinct elements (integers are parsed as such)")
    parser_generate.add_argument(
        '--count',
        action='store_true',
        help="Only print the number of subsets")
    parser_generate.set_defaults(func=_command_generate)

    args = parser.parse_args()

    # Set log level early
    debug_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if args.log_level not in debug_levels:
        print(f"Error: Log level must be one of {debug_levels}", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=args.log_level)

    # Load configuration file first (if it exists)
    try:
        load_config_file(args.config_file)
    except Exception as e:
        logging.error(f"Error loading config file: {e}")
        sys.exit(1)

    # CLI arguments override config file settings
    config_kwargs = {}
    if args.input_size is not None:
        config_kwargs['input_size'] = args.input_size
    if args.iterations is not None:
        config_kwargs['iterations'] = args.iterations
    if args.strategy:
        config_kwargs['strategies'] = args.strategy

    if config_kwargs:
        update_config(**config_kwargs)
    cfg = get_config()

    if args.command == 'show-config':
        args.func(args)
        sys.exit(0)

    # Validate configuration
    if cfg.input_size < 0:
        logging.error("Error: input size must be non-negative")
        sys.exit(1)
    if cfg.iterations < 1:
        logging.error("Error: iterations must be at least 1")
        sys.exit(1)
    if not cfg.strategies:
        logging.error("Error: at least one strategy must be configured")
        sys.exit(1)
    unknown = [s for s in cfg.strategies if s not in strategies]
    if unknown:
        logging.error(f"Error: Strategy must be one of {list(strategies)} (got {unknown})")
        sys.exit(1)

    args.func(args)
    sys.exit(0)


if __name__ == "__main__":
    main()
