"""solmint - command line entry point."""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from solana.rpc.async_api import AsyncClient
from spl.token.constants import TOKEN_2022_PROGRAM_ID

from solmint.config import AppConfig
from solmint.errors import SolmintError
from solmint.execution import SolanaExecutor
from solmint.logging_config import setup_logging
from solmint.nodes import NodeContext, default_registry
from solmint.nodes.mint_token import NODE_NAME, MintTokenNode

console = Console()
err_console = Console(stderr=True)


async def _run_mint(config: AppConfig, inputs: dict) -> dict:
    registry = default_registry()
    if config.token_2022:
        registry.register(NODE_NAME, lambda: MintTokenNode(program_id=TOKEN_2022_PROGRAM_ID))
    node = registry.build(NODE_NAME)

    async with AsyncClient(config.rpc_url) as client:
        executor = SolanaExecutor(
            client,
            max_retries=config.max_retries,
            retry_base_delay=config.retry_base_delay,
        )
        return await node.invoke(NodeContext(client=client, executor=executor), inputs)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log progress to the console")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """solmint - mint fungible SPL tokens."""
    ctx.obj = {"verbose": verbose}
    setup_logging(verbose=verbose)


@main.command("mint")
@click.option("--mint", "mint_account", required=True, help="Mint account address")
@click.option("--recipient", required=True, help="Recipient token account address")
@click.option("--amount", required=True, help="UI amount to mint, e.g. 1.5")
@click.option("--decimals", type=click.IntRange(0, 255), default=None, help="Mint decimals (fetched when omitted)")
@click.option("--submit/--no-submit", default=True, help="Send the transaction (default) or only build it")
@click.option("--rpc-url", default=None, help="Solana RPC endpoint")
@click.option("--fee-payer-key", default=None, help="Fee payer private key (or SOLMINT_FEE_PAYER_KEY)")
@click.option("--mint-authority-key", default=None, help="Mint authority private key (or SOLMINT_MINT_AUTHORITY_KEY)")
@click.option("--token-2022", "token_2022", is_flag=True, default=None, help="Use the Token-2022 program")
@click.pass_context
def mint(ctx: click.Context, mint_account: str, recipient: str, amount: str, decimals: int | None,
         submit: bool, rpc_url: str | None, fee_payer_key: str | None,
         mint_authority_key: str | None, token_2022: bool | None) -> None:
    """Mint AMOUNT tokens of MINT to RECIPIENT."""
    config = AppConfig.from_file_and_cli({
        "rpc_url": rpc_url,
        "fee_payer_key": fee_payer_key,
        "mint_authority_key": mint_authority_key,
        "token_2022": token_2022,
        "verbose": ctx.obj["verbose"],
    })
    if not config.fee_payer_key or not config.mint_authority_key:
        err_console.print("[red]Error:[/red] fee payer and mint authority keys are required")
        sys.exit(1)

    inputs = {
        "fee_payer": config.fee_payer_key,
        "mint_authority": config.mint_authority_key,
        "mint_account": mint_account,
        "recipient": recipient,
        "amount": amount,
        "decimals": decimals,
        "submit": submit,
    }
    try:
        result = asyncio.run(_run_mint(config, inputs))
    except SolmintError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    table = Table(title="mint_token")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("mint", mint_account)
    table.add_row("recipient", recipient)
    table.add_row("amount", amount)
    table.add_row("signature", result["signature"] or "[dim]not submitted[/dim]")
    console.print(table)


@main.command("nodes")
def nodes() -> None:
    """Print the definitions of all registered nodes as JSON."""
    click.echo(json.dumps(default_registry().node_definitions(), indent=2))


if __name__ == "__main__":
    main()
