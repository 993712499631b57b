#!/usr/bin/env python3
"""
Transfers CLI - preview and project budget transfers

Command-line interface for the transfer engine.
"""

from pathlib import Path

import click

from ..budget import (
    BudgetFileError,
    encumbrance_snapshot_from,
    load_line_items,
    load_transfer_requests,
    write_budget_csv,
    write_mapping_csv,
    write_projection_json,
)
from ..core.config import get_config
from ..core.currency import to_cents
from ..core.models import ProjectionResult, TransferMode
from ..engine import TransferError, compute_impact, project as project_transfers, project_skipping_rejected
from ..policy import PolicyDocumentError, load_policy

MODE_CHOICE = click.Choice([m.value for m in TransferMode])


@click.command()
@click.option("--policy", "policy_file", required=True, type=click.Path(dir_okay=False), help="Rates JSON/YAML file")
@click.option("--to", "to_account", required=True, help="Destination account")
@click.option("--amount", required=True, help="Amount in dollars, e.g. 10000.00")
@click.option("--mode", default=TransferMode.BUDGET_TOTAL.value, type=MODE_CHOICE, help="How to read --amount")
def preview(policy_file: str, to_account: str, amount: str, mode: str) -> None:
    """
    Preview how a transfer would split between destination and F&A.

    Examples:
      rebudget preview --policy rates.json --to 52000 --amount 10000 --mode direct_to_dest
      rebudget preview --policy rates.json --to 52000 --amount 20000
    """
    try:
        policy = load_policy(policy_file)
        impact = compute_impact(policy, to_account, to_cents(amount), mode)
    except (TransferError, PolicyDocumentError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Transfer to {to_account} ({mode})")
    click.echo(f"  Source out:      {impact.source_out}")
    click.echo(f"  Direct to dest:  {impact.direct_to_dest}")
    click.echo(f"  F&A to {policy.indirect_account}:  {impact.indirect_added}")
    click.echo(f"  MTDC eligible:   {'Yes' if impact.eligible else 'No'}")


@click.command()
@click.option("--policy", "policy_file", required=True, type=click.Path(dir_okay=False), help="Rates JSON/YAML file")
@click.option("--budget", "budget_file", required=True, type=click.Path(dir_okay=False), help="Budget CSV/JSON")
@click.option("--transfers", "transfers_file", required=True, type=click.Path(dir_okay=False), help="Transfer queue CSV/JSON")
@click.option("--snapshot", "snapshot_file", type=click.Path(dir_okay=False), help="Encumbrance snapshot CSV/JSON")
@click.option("--skip-rejected", is_flag=True, help="Drop rejected transfers instead of aborting the batch")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Override output directory")
@click.option("--dry-run", is_flag=True, help="Show results without writing files")
@click.pass_context
def project(
    ctx: click.Context,
    policy_file: str,
    budget_file: str,
    transfers_file: str,
    snapshot_file: str | None,
    skip_rejected: bool,
    output_dir: Path | None,
    dry_run: bool,
) -> None:
    """
    Apply a queue of transfers in order and export the results.

    Writes the transfer mapping CSV, the final budget CSV and a JSON summary.

    Examples:
      rebudget project --policy rates.json --budget budget.csv --transfers transfers.json
      rebudget project --policy rates.json --budget budget.csv --transfers t.csv --skip-rejected --dry-run
    """
    config = get_config()
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))

    try:
        policy = load_policy(policy_file)
        baseline = load_line_items(budget_file)
        snapshot = load_line_items(snapshot_file) if snapshot_file else encumbrance_snapshot_from(baseline)
        requests = load_transfer_requests(transfers_file)

        if verbose:
            click.echo(f"Policy: rate {policy.indirect_rate}, F&A account {policy.indirect_account}")
            click.echo(f"Budget: {len(baseline)} line items")
            click.echo(f"Transfers: {len(requests)} queued")
            click.echo()

        if skip_rejected:
            result = project_skipping_rejected(policy, baseline, snapshot, requests)
        else:
            result = project_transfers(policy, baseline, snapshot, requests)
    except TransferError as e:
        where = f" at transfer {e.transfer_id}" if e.transfer_id else ""
        raise click.ClickException(f"Projection aborted{where}: {e}") from e
    except (PolicyDocumentError, BudgetFileError) as e:
        raise click.ClickException(str(e)) from e

    _echo_result(result, policy.indirect_account)

    if dry_run:
        click.echo("\n💡 Dry run: no files written.")
        return

    target = output_dir or config.export.output_dir
    mapping_path = write_mapping_csv(result.mapping_log, target / config.export.mapping_filename)
    budget_path = write_budget_csv(result.line_items, target / config.export.budget_filename)
    summary_path = write_projection_json(result, policy, target / config.export.summary_filename)

    click.echo(f"\n   Mapping: {mapping_path}")
    click.echo(f"   Budget:  {budget_path}")
    click.echo(f"   Summary: {summary_path}")


def _echo_result(result: ProjectionResult, indirect_account: str) -> None:
    for row in result.mapping_log:
        click.echo(
            f"{row.transfer_id}: {row.from_account} -> {row.to_account} [{row.mode.value}] "
            f"out {row.source_out}, direct {row.direct_to_dest}, "
            f"F&A {row.indirect_added} ({'MTDC' if row.dest_eligible else 'non-MTDC'})"
        )
    for rejected in result.rejected:
        click.echo(f"⚠️  Skipped {rejected.request.id}: {rejected.reason}")

    click.echo(f"✅ Applied {len(result.mapping_log)} transfers")
    click.echo(f"   F&A added to {indirect_account}: {result.indirect_added_total}")
    click.echo(f"   Baseline total: {result.baseline_total}")
    click.echo(f"   Proposed total: {result.proposed_total}")
