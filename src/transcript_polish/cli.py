#!/usr/bin/env python3
"""Command line interface for transcript-polish"""
import rich_click as click
from rich_click import RichGroup

from transcript_polish import __version__, app_hooks

# Set up rich-click configuration globally
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.SHOW_METAVARS_COLUMN = False
click.rich_click.APPEND_METAVARS_HELP = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "#ff5555"
click.rich_click.ERRORS_SUGGESTION = "Try running the '--help' flag for more information."
click.rich_click.MAX_WIDTH = 120
click.rich_click.STYLE_OPTION = "#ff79c6"  # Dracula Pink - for option flags
click.rich_click.STYLE_SWITCH = "#50fa7b"  # Dracula Green - for switches
click.rich_click.STYLE_HEADER_TEXT = "bold yellow"
click.rich_click.STYLE_USAGE = "#BD93F9"  # Purple - for "Usage:" line
click.rich_click.STYLE_HELPTEXT = "#B3B8C0"
click.rich_click.STYLE_COMMAND = "#50fa7b"


@click.group(cls=RichGroup, context_settings={"help_option_names": ["-h", "--help"], "max_content_width": 120})
@click.version_option(version=__version__, prog_name="transcript-polish")
def main():
    """✨ [bold color(6)]Transcript Polish[/bold color(6)] - Clean up raw speech-to-text output

    \b
    [bold yellow]🎯 Most Common Use Cases[/bold yellow]
    [green]   transcript-polish format "I went to the the store."  [/green] [italic][#B3B8C0]# Normalize one utterance[/#B3B8C0][/italic]
    [green]   echo "three thirty pm" | transcript-polish format   [/green] [italic][#B3B8C0]# Read text from stdin[/#B3B8C0][/italic]
    [green]   transcript-polish parse-number seven million five   [/green] [italic][#B3B8C0]# Try the number parser[/#B3B8C0][/italic]
    [green]   transcript-polish config --defaults                 [/green] [italic][#B3B8C0]# Print default settings[/#B3B8C0][/italic]
    """
    pass


@main.command()
@click.pass_context
@click.argument("text", required=False)
@click.option("--config", type=click.Path(dir_okay=False), help="⚙️ Path to a settings file (JSON, // comments allowed)")
@click.option("--vocab", multiple=True, help="📖 Vocabulary entry to protect and correct (repeatable)")
@click.option("--no-formatting", is_flag=True, help="📝 Skip the formatting stage, apply only removals and vocabulary")
@click.option("--json", is_flag=True, help="📋 Output input and result as JSON")
@click.option("--debug", is_flag=True, help="🐞 Enable detailed debug logging")
def format(ctx, text, config, vocab, no_formatting, json, debug):
    """📝 Normalize TEXT (or stdin) with the configured pipeline"""
    ctx.exit(
        app_hooks.on_format(
            command_name="format",
            text=text,
            config=config,
            vocab=vocab,
            no_formatting=no_formatting,
            json=json,
            debug=debug,
        )
    )


@main.command("parse-number")
@click.pass_context
@click.argument("words", nargs=-1, required=True)
@click.option("--json", is_flag=True, help="📋 Output words and value as JSON")
def parse_number(ctx, words, json):
    """🔢 Fold spoken number WORDS into an integer"""
    ctx.exit(app_hooks.on_parse_number(command_name="parse-number", words=words, json=json))


@main.command()
@click.pass_context
@click.option("--config", type=click.Path(dir_okay=False), help="⚙️ Path to a settings file")
@click.option("--defaults", is_flag=True, help="🧹 Show built-in defaults instead of the loaded file")
@click.option("--debug", is_flag=True, help="🐞 Show tracebacks for configuration errors")
def config(ctx, config, defaults, debug):
    """⚙️ Print the effective settings as JSON"""
    ctx.exit(app_hooks.on_config(command_name="config", config=config, defaults=defaults, debug=debug))


def cli_entry():
    """Entry point for the installed console script."""
    main()


if __name__ == "__main__":
    cli_entry()
