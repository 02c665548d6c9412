"""
Unified CLI for Cipherly.

Entry point: cipherly
"""
import json
import sys
from pathlib import Path

import click

from .config import SolverConfig


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory holding the frequency table (default: data/).")
@click.option("--frequencies", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Word/count table to use instead of the downloaded one.")
@click.option("--force", is_flag=True, default=False,
              help="Redo work even if its output already exists.")
@click.pass_context
def cli(ctx, data_dir, frequencies, force):
    """Substitution cryptogram solver."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = SolverConfig.from_overrides(
        data_dir=data_dir,
        frequencies_override=frequencies,
    )
    ctx.obj["force"] = force


def _load_dictionary(config):
    from .dictionary import load_dictionary

    try:
        return load_dictionary(config)
    except FileNotFoundError as e:
        raise click.ClickException(f"{e}. Run `cipherly download` first.") from e
    except ValueError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.option("--url", type=str, default=None,
              help="URL of the word/count table to download.")
@click.pass_context
def download(ctx, url):
    """Download the word frequency table."""
    from .dictionary import download_frequencies
    from .utils import print_header

    config = ctx.obj["config"]
    if url is not None:
        config.frequencies_url = url
    config.ensure_dirs()
    print_header("DOWNLOAD — Word frequencies")
    download_frequencies(config.frequencies_url, config.frequencies_path,
                         force=ctx.obj["force"])


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Read the ciphertext from a file.")
@click.option("--max-solutions", type=click.IntRange(min=0), default=None,
              help="Number of solutions to look for (default: 5).")
@click.option("--timeout-ms", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Time budget in milliseconds (default: 6000).")
@click.option("--no-timeout", is_flag=True, default=False,
              help="Search until enough solutions are found or none are left.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print solutions as JSON.")
@click.pass_context
def solve(ctx, text, path, max_solutions, timeout_ms, no_timeout, as_json):
    """Solve a cryptogram given as TEXT, --file or standard input."""
    from .solver import search
    from .utils import print_header, print_step

    config = ctx.obj["config"]
    if max_solutions is not None:
        config.max_solution_count = max_solutions
    if timeout_ms is not None:
        config.timeout_ms = timeout_ms
    if no_timeout:
        config.timeout_ms = None

    if text is not None and path is not None:
        raise click.UsageError("Give the ciphertext either as TEXT or with --file.")
    if path is not None:
        ciphertext = path.read_text(encoding="utf-8")
    elif text is not None:
        ciphertext = text
    else:
        ciphertext = sys.stdin.read()

    if as_json:
        dictionary = _load_dictionary(config)
        result = search(ciphertext, dictionary, config.max_solution_count,
                        config.timeout_ms)
        click.echo(json.dumps([
            {
                "plaintext": s.plaintext,
                "cipher": s.cipher,
                "mean_frequency": s.mean_frequency,
            }
            for s in result.solutions
        ], indent=2, ensure_ascii=False))
        return

    print_header("SOLVE — Substitution cryptogram")
    print_step("Loading dictionary...")
    dictionary = _load_dictionary(config)
    click.echo(f"    {len(dictionary.word_frequencies):,} words, "
               f"{len(dictionary.pattern_words):,} patterns")

    print_step("Searching...")
    result = search(ciphertext, dictionary, config.max_solution_count,
                    config.timeout_ms)
    click.echo(f"    {result.nodes:,} nodes explored")

    if result.timed_out:
        click.echo("    Time budget exhausted: more solutions may exist.")

    if not result.solutions:
        click.echo("\n  No solutions found.")
        _report_unmatched(ciphertext, dictionary)
        return

    for rank, solution in enumerate(result.solutions, start=1):
        click.echo(f"\n  #{rank}  (mean frequency {solution.mean_frequency:.4f})")
        click.echo(f"    {solution.plaintext}")
        click.echo("    " + " ".join(f"{k}→{v}" for k, v in solution.cipher.items()))


def _report_unmatched(ciphertext, dictionary):
    """List ciphertext words no dictionary word can match."""
    from .words import parse_words

    unmatched = sorted(
        word for word in parse_words(ciphertext, dictionary.alphabet)
        if not dictionary.candidates(word)
    )
    if unmatched:
        click.echo("    Words without a same-pattern dictionary word: "
                   + ", ".join(unmatched))


@cli.command()
@click.argument("words", nargs=-1, required=True)
@click.option("--limit", type=click.IntRange(min=1), default=10,
              help="Candidates to show per word (default: 10).")
@click.pass_context
def pattern(ctx, words, limit):
    """Show the pattern of each WORD and its most frequent candidates."""
    from .pattern import compute_pattern
    from .words import parse_words

    dictionary = _load_dictionary(ctx.obj["config"])
    for raw in words:
        for word in sorted(parse_words(raw, dictionary.alphabet)):
            candidates = dictionary.candidates(word)
            click.echo(f"  {word}  {compute_pattern(word)}  "
                       f"({len(candidates):,} candidates)")
            for candidate in candidates[:limit]:
                click.echo(f"    {candidate:20s} {dictionary.frequency(candidate):.6f}")


def main():
    cli()
