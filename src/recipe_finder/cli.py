"""CLI interface for the recipe finder agent."""

import asyncio
import json

import typer

from .config import CONFIG_FILE, runtime, settings
from .events import DoneEvent, ResultEvent, TextEvent, ToolEvent, UsageEvent
from .exceptions import AgentStreamError
from .observability import setup_structured_logging
from .options import ALLOWED_TOOLS, TOOL_PREFIX, build_config
from .relay import stream_agent
from .session import RunSummary

app = typer.Typer(help="Find recipes on AllRecipes with a browser-driving agent")


@app.callback()
def main() -> None:
    """Configure logging once per process, before any command runs."""
    setup_structured_logging(settings.logging.level, settings.logging.json_output)


async def _run_search(prompt: str, hosted: bool, as_json: bool) -> RunSummary:
    options = build_config(standalone=not hosted).to_sdk_options()
    summary = RunSummary()

    try:
        async for event in stream_agent(prompt, options=options):
            summary.add(event)
            if as_json:
                print(json.dumps(event.to_wire()), flush=True)
                continue
            match event:
                case TextEvent(text=text):
                    print(text, flush=True)
                case ToolEvent(name=name):
                    typer.echo(f"→ {name.removeprefix(TOOL_PREFIX)}", err=True)
                case ResultEvent(text=text):
                    print(f"\n{text}", flush=True)
                case UsageEvent() | DoneEvent():
                    pass
    except Exception as e:
        raise AgentStreamError(f"Recipe search failed: {e}") from e

    return summary


@app.command()
def search(
    prompt: str = typer.Argument(..., help="What to look for, e.g. 'easy vegetarian lasagna'"),
    as_json: bool = typer.Option(False, "--json", help="Print one JSON event per line"),
    hosted: bool = typer.Option(False, "--hosted", help="Use a tool server supplied by the host instead of launching one"),
    save: bool = typer.Option(False, "--save", "-s", help="Save the final answer and a run record to the results directory"),
) -> None:
    """Search AllRecipes and stream the agent's progress."""
    summary = asyncio.run(_run_search(prompt, hosted, as_json))

    if not as_json:
        typer.echo(
            f"\n[{len(summary.tools)} tool calls, {summary.input_tokens} in / {summary.output_tokens} out tokens]",
            err=True,
        )

    if save and summary.final_text:
        path = summary.save(prompt, settings.get_results_dir())
        typer.echo(f"Saved to {path}", err=True)


@app.command()
def tools() -> None:
    """List the browser tools the agent may call."""
    for name in ALLOWED_TOOLS:
        print(name)


@app.command()
def config() -> None:
    """Show current configuration."""
    tool_server = build_config(standalone=True).tool_server
    print(f"Config file: {CONFIG_FILE}")
    print(f"Model: {settings.agent.model}")
    print(f"Max Turns: {settings.agent.max_turns}")
    print(f"CHROME_PATH: {runtime.env.get('CHROME_PATH') or '(unset, auto-detect)'}")
    print(f"Container Mode: {runtime.is_container}")
    print(f"Tool Server: {tool_server.command} {' '.join(tool_server.args)}")
    print(f"Results Dir: {settings.output.results_dir or '(default)'}")
    print(f"Log Level: {settings.logging.level}")


if __name__ == "__main__":
    app()
