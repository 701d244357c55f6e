"""Typer CLI for Vendor-Dashboard."""

from datetime import timedelta

import typer
from rich.console import Console

app = typer.Typer(name="vendor-dashboard", help="Vendor-Dashboard: marketplace vendor API")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(8080, help="Bind port"),
):
    """Start the Vendor-Dashboard API server."""
    import uvicorn
    from vendor_dashboard.app import create_app

    console.print(f"[bold green]Starting Vendor-Dashboard on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("mint-token")
def mint_token_command(
    subject: str = typer.Option(..., help="Identity-provider user id (sub claim)"),
    email: str = typer.Option("", help="Email claim"),
    minutes: int = typer.Option(60, help="Lifetime in minutes"),
):
    """Sign a bearer token with the configured secret (local development)."""
    from vendor_dashboard.auth.tokens import mint_token
    from vendor_dashboard.common.config import get_settings

    settings = get_settings()
    token = mint_token(
        settings.token_signing_secret,
        subject,
        email=email,
        audience=settings.token_audience,
        expires_in=timedelta(minutes=minutes),
        algorithm=settings.token_algorithms[0],
    )
    console.print(token, soft_wrap=True)


@app.command()
def health(
    url: str = typer.Option("http://localhost:8080", help="Server URL"),
):
    """Check Vendor-Dashboard server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] v{data['version']}")
    except (httpx.HTTPError, ValueError, KeyError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
