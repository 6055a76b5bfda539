"""
Bitcoin Education Agents - Command Line Entry Point
===================================================

Commands:
    tools                         List every registered tool
    call <tool> [--args JSON]     Run one tool and print its ToolResult
    assessment --topic fees       Generate an assessment
    design                        Run the Canva auto designer once
    schedule                      Start the daily design refresh scheduler
    status                        Show design refresh history

Run with:
    python -m src.main <command>

Or after installing:
    bitcoin-edu <command>
"""

import argparse
import asyncio
import json
import signal
import sys

from src.utils.config import get_config
from src.utils.logger import Logger

main_logger = Logger("Main")


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bitcoin-edu",
        description="Bitcoin education agents and market data tools"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("tools", help="List every registered tool")

    call = commands.add_parser("call", help="Run a tool by name")
    call.add_argument("tool", help="Tool name, see `tools`")
    call.add_argument("--args", default="{}", help="Tool arguments as a JSON object")

    assessment = commands.add_parser("assessment", help="Generate an assessment")
    assessment.add_argument("--topic", default="fees")
    assessment.add_argument("--difficulty", default="beginner", choices=["beginner", "intermediate", "advanced"])
    assessment.add_argument("--count", type=int, default=5, help="Number of questions")
    assessment.add_argument("--types", nargs="+", help="Question types, e.g. multiple_choice scenario")

    commands.add_parser("design", help="Run the Canva auto designer once")
    commands.add_parser("schedule", help="Start the daily design refresh scheduler")
    commands.add_parser("status", help="Show design refresh history")

    return parser


# ==============================================================================
# Commands
# ==============================================================================

async def _list_tools() -> int:
    from src.tools import register_all_tools

    for schema in register_all_tools().get_schemas():
        print(f"{schema['name']:45} {schema['description']}")
    return 0


async def _call_tool(name: str, raw_args: str) -> int:
    from src.agents.executor import ToolExecutor

    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        main_logger.error("--args must be a JSON object", e)
        return 2

    executor = ToolExecutor()
    if not executor.has_tool(name):
        main_logger.error(f"Unknown tool: {name}")
        return 2

    [call] = executor.parse_tool_calls([{"id": "cli", "name": name, "arguments": arguments}])
    result = (await executor.execute_one(call)).result

    _print_json(result.to_dict())
    return 0 if result.success else 1


async def _assessment(args: argparse.Namespace) -> int:
    from src.agents.assessment_generator import AssessmentConfig, AssessmentGenerator

    assessment = await AssessmentGenerator().generate_assessment(AssessmentConfig(
        topic=args.topic,
        difficulty=args.difficulty,
        question_count=args.count,
        question_types=args.types,
    ))
    _print_json(assessment.to_dict())
    return 0


async def _design() -> int:
    from src.agents.canva_auto_designer import CanvaAutoDesigner

    summary = await CanvaAutoDesigner().run()
    _print_json(summary)
    return 0


async def _schedule() -> int:
    """Run the refresh scheduler until SIGINT or SIGTERM."""
    from src.tools.scheduler import DesignRefreshScheduler

    scheduler = DesignRefreshScheduler()
    if not scheduler.start():
        return 0

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    main_logger.info("Design refresh is running. Press Ctrl+C to stop.")
    await stop.wait()

    main_logger.info("Shutting down...")
    scheduler.stop()
    return 0


async def _status() -> int:
    from src.tools.scheduler import DesignRefreshScheduler

    _print_json(DesignRefreshScheduler().get_status())
    return 0


async def main(argv: list[str] | None = None) -> int:
    """
    Main async entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    get_config()

    try:
        if args.command == "tools":
            return await _list_tools()
        if args.command == "call":
            return await _call_tool(args.tool, args.args)
        if args.command == "assessment":
            return await _assessment(args)
        if args.command == "design":
            return await _design()
        if args.command == "schedule":
            return await _schedule()
        return await _status()

    except Exception as e:
        main_logger.error(f"Command failed: {args.command}", e)
        return 1


def run():
    """
    Synchronous entry point.

    This is called when running with the `bitcoin-edu` command.
    """
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
