"""
Command-line interface for optimal-tau.

Usage:
    optimal-tau tau              Optimal τ and J_opt for a frequency band
    optimal-tau circles          Main circle and per-frequency circles
    optimal-tau axis             Gridline spacing for a zoom level
    optimal-tau amplification    J for a given τ over a dense sample
    optimal-tau sweep            Optimal τ and J_opt over a range of ε
    optimal-tau render           Write the construction as an SVG file
"""

import json
import logging
import math
from pathlib import Path
from typing import Annotated

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from optimal_tau import __version__
from optimal_tau.algorithms import (
    Complex,
    amplification,
    amplification_optimal,
    angular_sample,
    compute_axis_scale,
    compute_frequency_circles,
    compute_main_circle,
    compute_optimal_tau,
    frequency_sample,
)
from optimal_tau.data import DEFAULT_SETTINGS, Settings
from optimal_tau.errors import DomainError, RangeError
from optimal_tau.visualizations import Viewport, build_scene, write_svg

app = typer.Typer(
    name="optimal-tau",
    help="Optimal complex relaxation parameter τ for a frequency band",
    add_completion=False,
)
console = Console()

EpsOption = Annotated[float, typer.Option("--eps", "-e", help="Damping ratio ε")]
FminOption = Annotated[float, typer.Option("--fmin", help="Lower band edge")]
FmaxOption = Annotated[float, typer.Option("--fmax", help="Upper band edge")]
NFreqsOption = Annotated[
    int, typer.Option("--n-freqs", "-n", help="Number of sampled frequencies")
]
TauRealOption = Annotated[
    float | None, typer.Option("--tau-real", help="Re(τ); optimal τ if omitted")
]
TauImagOption = Annotated[
    float | None, typer.Option("--tau-imag", help="Im(τ); optimal τ if omitted")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"optimal-tau version {__version__}")
        raise typer.Exit()


@app.callback()  # type: ignore[misc]
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """optimal-tau - optimal τ construction and diagnostics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(exc: Exception) -> typer.Exit:
    console.print(f"[red]Error:[/] {escape(str(exc))}")
    return typer.Exit(code=1)


def _settings(
    eps: float,
    fmin: float,
    fmax: float,
    n_freqs: int,
    tau_real: float | None,
    tau_imag: float | None,
) -> Settings:
    """Build a resolved, validated settings snapshot from CLI options."""
    tau = None
    if tau_real is not None or tau_imag is not None:
        if tau_real is None or tau_imag is None:
            raise DomainError("--tau-real and --tau-imag must be given together")
        tau = Complex(tau_real, tau_imag)
    settings = Settings(
        fmin=fmin, fmax=fmax, n_freqs=n_freqs, eps=eps, tau=tau, optimal=tau is None
    )
    settings.validate()
    return settings.resolved()


@app.command()  # type: ignore[misc]
def tau(
    eps: EpsOption = DEFAULT_SETTINGS.eps,
    fmin: FminOption = DEFAULT_SETTINGS.fmin,
    fmax: FmaxOption = DEFAULT_SETTINGS.fmax,
    as_json: JsonOption = False,
) -> None:
    """Compute the optimal τ and its worst-case amplification J_opt."""
    try:
        t = compute_optimal_tau(eps, fmin, fmax)
        j_opt = amplification_optimal(eps, fmin, fmax)
        main_circle = compute_main_circle(t, eps)
    except (DomainError, RangeError) as exc:
        raise _fail(exc) from exc

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "eps": eps,
                    "fmin": fmin,
                    "fmax": fmax,
                    "tau": t.to_dict(),
                    "j_opt": j_opt,
                    "main_circle": main_circle.to_dict(),
                }
            )
        )
        return

    table = Table(title=f"Optimal τ  (ε={eps:g}, f ∈ [{fmin:g}, {fmax:g}])")
    table.add_column("Quantity", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right")
    table.add_row("Re(τ)", f"{t.real:.6g}")
    table.add_row("Im(τ)", f"{t.imag:.6g}")
    table.add_row("|τ|", f"{abs(t):.6g}")
    table.add_row("arg(τ)", f"{math.atan2(t.imag, t.real):.6g}")
    table.add_row("J_opt", f"{j_opt:.6g}")
    table.add_row("Main circle center", f"{main_circle.center.imag:.6g}i")
    table.add_row("Main circle radius", f"{main_circle.radius:.6g}")
    console.print(table)


@app.command()  # type: ignore[misc]
def circles(
    eps: EpsOption = DEFAULT_SETTINGS.eps,
    fmin: FminOption = DEFAULT_SETTINGS.fmin,
    fmax: FmaxOption = DEFAULT_SETTINGS.fmax,
    n_freqs: NFreqsOption = DEFAULT_SETTINGS.n_freqs,
    tau_real: TauRealOption = None,
    tau_imag: TauImagOption = None,
    as_json: JsonOption = False,
) -> None:
    """List the main circle and the circle induced by each sampled frequency."""
    try:
        settings = _settings(eps, fmin, fmax, n_freqs, tau_real, tau_imag)
        t = settings.tau
        assert t is not None
        main_circle = compute_main_circle(t, eps)
        freq_circles = compute_frequency_circles(t, eps, fmin, fmax, n_freqs)
    except (DomainError, RangeError) as exc:
        raise _fail(exc) from exc
    freqs = frequency_sample(fmin, fmax, n_freqs)

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "settings": settings.to_dict(),
                    "main_circle": main_circle.to_dict(),
                    "frequency_circles": [
                        {"frequency": float(f), **c.to_dict()}
                        for f, c in zip(freqs, freq_circles, strict=True)
                    ],
                }
            )
        )
        return

    table = Table(title=f"Circles for τ = {t.real:.4g} {t.imag:+.4g}i")
    table.add_column("Circle", style="cyan", no_wrap=True)
    table.add_column("Re(center)", justify="right")
    table.add_column("Im(center)", justify="right")
    table.add_column("Radius", justify="right")
    table.add_row(
        "main",
        f"{main_circle.center.real:.6g}",
        f"{main_circle.center.imag:.6g}",
        f"{main_circle.radius:.6g}",
        style="bold",
    )
    for f, c in zip(freqs, freq_circles, strict=True):
        table.add_row(
            f"f = {f:.4g}",
            f"{c.center.real:.6g}",
            f"{c.center.imag:.6g}",
            f"{c.radius:.6g}",
        )
    console.print(table)


@app.command()  # type: ignore[misc]
def axis(
    goal: Annotated[
        float, typer.Option("--goal", "-g", help="Target gridline spacing (pixels)")
    ] = 25.0,
    scale: Annotated[
        float, typer.Option("--scale", "-s", help="Pixels per world unit")
    ] = 1.0,
    min_label: Annotated[
        float | None,
        typer.Option("--min-label", help="Minimum label spacing (default 2·goal)"),
    ] = None,
) -> None:
    """Show the gridline step chosen for a zoom level."""
    try:
        result = compute_axis_scale(goal, scale, min_label_pixels=min_label)
    except DomainError as exc:
        raise _fail(exc) from exc

    table = Table(title="Axis Scale")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Step", f"{result.step:g}")
    table.add_row("Step multiplier", str(result.step_multiplier))
    table.add_row("Decimal power", str(result.decimal_power))
    table.add_row("Step (pixels)", f"{result.step_pixels:.4g}")
    table.add_row("Label step", f"{result.label_step:g}")
    console.print(table)


@app.command(name="amplification")  # type: ignore[misc]
def amplification_cmd(
    eps: EpsOption = DEFAULT_SETTINGS.eps,
    fmin: FminOption = DEFAULT_SETTINGS.fmin,
    fmax: FmaxOption = DEFAULT_SETTINGS.fmax,
    tau_real: TauRealOption = None,
    tau_imag: TauImagOption = None,
    samples: Annotated[
        int, typer.Option("--samples", help="Frequencies in the dense sample")
    ] = 1000,
) -> None:
    """Evaluate J for τ over a dense sample and compare with J_opt."""
    try:
        settings = _settings(eps, fmin, fmax, samples, tau_real, tau_imag)
        t = settings.tau
        assert t is not None
        j = amplification(t, angular_sample(fmin, fmax, eps, samples))
        j_opt = amplification_optimal(eps, fmin, fmax)
    except (DomainError, RangeError) as exc:
        raise _fail(exc) from exc

    console.print(f"τ      = {t.real:.6g} {t.imag:+.6g}i")
    console.print(f"J      = {j:.6g}  ({samples} frequencies)")
    console.print(f"J_opt  = {j_opt:.6g}")


@app.command()  # type: ignore[misc]
def sweep(
    fmin: FminOption = DEFAULT_SETTINGS.fmin,
    fmax: FmaxOption = DEFAULT_SETTINGS.fmax,
    eps_min: Annotated[float, typer.Option("--eps-min", help="Smallest ε")] = 0.1,
    eps_max: Annotated[float, typer.Option("--eps-max", help="Largest ε")] = 1.0,
    steps: Annotated[int, typer.Option("--steps", help="Number of ε values")] = 10,
) -> None:
    """Tabulate the optimal τ and J_opt over a range of damping ratios."""
    table = Table(title=f"Optimal τ over ε  (f ∈ [{fmin:g}, {fmax:g}])")
    table.add_column("ε", style="cyan", justify="right")
    table.add_column("Re(τ)", justify="right")
    table.add_column("Im(τ)", justify="right")
    table.add_column("J_opt", justify="right")

    try:
        if steps < 2:
            raise DomainError(f"steps must be at least 2, got {steps}")
        for e in np.linspace(eps_min, eps_max, steps):
            t = compute_optimal_tau(float(e), fmin, fmax)
            j_opt = amplification_optimal(float(e), fmin, fmax)
            table.add_row(f"{e:.4g}", f"{t.real:.6g}", f"{t.imag:.6g}", f"{j_opt:.6g}")
    except (DomainError, RangeError) as exc:
        raise _fail(exc) from exc

    console.print(table)


@app.command()  # type: ignore[misc]
def render(
    output: Annotated[Path, typer.Argument(help="SVG file to write")],
    eps: EpsOption = DEFAULT_SETTINGS.eps,
    fmin: FminOption = DEFAULT_SETTINGS.fmin,
    fmax: FmaxOption = DEFAULT_SETTINGS.fmax,
    n_freqs: NFreqsOption = DEFAULT_SETTINGS.n_freqs,
    tau_real: TauRealOption = None,
    tau_imag: TauImagOption = None,
    width: Annotated[int, typer.Option("--width", help="Width (CSS pixels)")] = 800,
    height: Annotated[int, typer.Option("--height", help="Height (CSS pixels)")] = 600,
    dpr: Annotated[float, typer.Option("--dpr", help="Device-pixel ratio")] = 1.0,
) -> None:
    """Render the construction to an SVG file."""
    try:
        settings = _settings(eps, fmin, fmax, n_freqs, tau_real, tau_imag)
        scene = build_scene(settings, Viewport(width, height, dpr))
    except (DomainError, RangeError) as exc:
        raise _fail(exc) from exc

    write_svg(scene, output)
    console.print(
        f"Wrote [bold]{output}[/] ({scene.width}×{scene.height}, "
        f"{len(scene.frequency_circles)} frequencies, step {scene.axis.step:g})"
    )


if __name__ == "__main__":
    app()
