# TimeLog/cli.py

import argparse
import logging
import os
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError
load_dotenv()

from TimeLog.config import Settings
from TimeLog.commands import capture_prompt, generate_timesheet, log_activity, now_local
from TimeLog.context import read_code_context
from TimeLog.errors import TimeLogError
from TimeLog.llm.transport import GeminiTransport

log = logging.getLogger("TimeLog.cli")


def resolve_api_key(settings: Settings) -> Optional[str]:
    return settings.gemini_api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


def build_transport(settings: Settings) -> GeminiTransport:
    api_key = resolve_api_key(settings)
    if not api_key:
        msg = "Gemini API key is required. Set TIMELOG_GEMINI_API_KEY (or GEMINI_API_KEY)."
        log.error(msg)
        raise SystemExit(1)
    return GeminiTransport(api_key=api_key, temperature=settings.llm_temperature)


def _code_context(args_ns, settings: Settings, selection: Optional[str] = None):
    if not args_ns.file:
        return "", "", selection or ""
    snippet, method = read_code_context(
        args_ns.file, line=args_ns.line, radius=settings.context_radius_chars, selection=selection
    )
    return str(args_ns.file.resolve()), method, snippet


def _read_captured_text(args_ns) -> str:
    if args_ns.text is not None:
        return args_ns.text
    if sys.stdin.isatty():
        return input("Paste or type the AI prompt / task description: ")
    return sys.stdin.read()


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="timelog",
        description="TimeLog: log development activity and turn it into a daily timesheet"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging for all TimeLog modules.")
    parser.add_argument("--workspace", type=Path, default=Path.cwd(), help="Workspace root (default: current directory).")
    subparsers = parser.add_subparsers(dest="command", title="Available Commands", required=True)

    # --- Log Activity Subcommand ---
    parser_log = subparsers.add_parser("log", help="Log what you are working on.")
    parser_log.add_argument("description", help="Task description, e.g. 'Fixed null check in UserService'.")
    parser_log.add_argument("--file", type=Path, help="Active file, used for code context.")
    parser_log.add_argument("--line", type=int, default=None, help="1-based cursor line in --file.")
    def handle_log(args_ns, current_settings: Settings):
        file, method, snippet = _code_context(args_ns, current_settings)
        transport = build_transport(current_settings)
        entry = log_activity(
            current_settings, transport, args_ns.workspace, args_ns.description,
            file=file, method=method, snippet=snippet,
        )
        print(f"✅ Activity logged at {entry.timestamp.strftime('%H:%M:%S')}")
    parser_log.set_defaults(func=handle_log)

    # --- Capture Prompt Subcommand ---
    parser_capture = subparsers.add_parser("capture", help="Log a captured AI prompt.")
    parser_capture.add_argument("--source", choices=["manual", "clipboard", "selection"], default="clipboard",
                                help="Where the prompt came from (default: clipboard).")
    parser_capture.add_argument("--text", default=None, help="Prompt text. Read from stdin when omitted.")
    parser_capture.add_argument("--file", type=Path, help="Active file, used for code context.")
    parser_capture.add_argument("--line", type=int, default=None, help="1-based cursor line in --file.")
    def handle_capture(args_ns, current_settings: Settings):
        text = _read_captured_text(args_ns)
        selection = text if args_ns.source == "selection" else None
        file, method, snippet = _code_context(args_ns, current_settings, selection=selection)
        transport = build_transport(current_settings)
        entry = capture_prompt(
            current_settings, transport, args_ns.workspace, text, args_ns.source,
            file=file, method=method, snippet=snippet,
        )
        if entry is None:
            print("Duplicate prompt detected within the last few minutes, skipped.")
            return
        print(f"✅ AI prompt logged [{args_ns.source}] at {entry.timestamp.strftime('%H:%M:%S')}")
    parser_capture.set_defaults(func=handle_capture)

    # --- Timesheet Subcommand ---
    parser_timesheet = subparsers.add_parser("timesheet", help="Generate the timesheet for a day.")
    parser_timesheet.add_argument("--day", type=lambda s: date.fromisoformat(s) if s else None, help="Day YYYY-MM-DD (default: today).")
    parser_timesheet.add_argument("--days-ago", type=int, default=None, help="Days ago (overrides --day).")
    def handle_timesheet(args_ns, current_settings: Settings):
        today = now_local(current_settings).date()
        target_day = (today - timedelta(days=args_ns.days_ago)) if args_ns.days_ago is not None else (args_ns.day or today)
        log.info(f"CLI: Generating timesheet for {target_day}...")
        transport = build_transport(current_settings)
        out_path = generate_timesheet(current_settings, transport, args_ns.workspace, target_day)
        print(f"✅ Timesheet saved: {out_path}")
    parser_timesheet.set_defaults(func=handle_timesheet)

    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
        level=logging.INFO,
    )
    if args.debug:
        logging.getLogger("TimeLog").setLevel(logging.DEBUG)
        log.debug("Debug logging enabled via CLI.")

    try:
        settings = Settings()
    except ValidationError as e:
        log.error(f"Invalid TimeLog settings (check TIMELOG_* variables and .env): {e}")
        sys.exit(1)

    try:
        args.func(args, settings)
    except TimeLogError as e:
        log.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
