import os, sys, json, logging, typer, yaml, structlog
from jsonschema import validate
from ..schemas.schema import get_schema
from .registry import DEFAULT_SEEDING, DEFAULT_DYNAMICS
app = typer.Typer(add_completion=False)
def configure_logging(level: str = "INFO"):
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level.upper(), logging.INFO), force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
@app.callback()
def main(log_level: str = "INFO"):
    configure_logging(log_level)
def scenario_defaults() -> dict:
    return {
        "world": {"type": "grid", "width": 100, "height": 100},
        "generation": {"smoothing_passes": 30},
        "randomness": {"seed": 1337},
        "seeding": DEFAULT_SEEDING,
        "dynamics": DEFAULT_DYNAMICS,
        "outputs": {"metrics_cadence": 1},
    }
@app.command()
def init(out: str = os.path.join("biomesim", "scenarios")):
    d = scenario_defaults()
    os.makedirs(out, exist_ok=True)
    p = os.path.join(out, "default.yaml")
    with open(p, "w") as f:
        yaml.safe_dump(d, f, sort_keys=True)
    typer.echo(p)
@app.command()
def validate_scenario(path: str):
    from .engine import stable_hash
    with open(path, "r") as f:
        cfg = yaml.safe_load(f)
    validate(cfg, get_schema())
    typer.echo(stable_hash(cfg))
@app.command()
def run(path: str, ticks: int = 500, out: str = "runs", label: str = None):
    from .engine import load_scenario, run_headless
    cfg = load_scenario(path)
    rd = run_headless(cfg, ticks, out, label)
    typer.echo(os.path.abspath(rd))
@app.command()
def inspect(run_dir: str):
    import pandas as pd
    mp = os.path.join(run_dir, "manifest.json")
    with open(mp, "r") as f:
        m = json.load(f)
    typer.echo(json.dumps({"label": m.get("label"), "ticks": m.get("ticks"), "runtime_s": m.get("runtime_s"), "final_population": m.get("final_population")}, separators=(",", ":"), sort_keys=True))
    fp = os.path.join(run_dir, "metrics", "population.parquet")
    df = pd.read_parquet(fp)
    tail = df.sort_values(["tick", "terrain"]).tail(6)
    typer.echo(tail.to_string(index=False))
@app.command()
def show(path: str, ticks: int = 0, save: str = None, plot_type: str = "frame", run_dir: str = None):
    from .viz import plot_frame, plot_population_timeseries
    if plot_type == "frame":
        from .engine import load_scenario
        from .simulation import simulation_from_scenario
        sim = simulation_from_scenario(load_scenario(path))
        for _ in range(ticks):
            sim.advance()
        plot_frame(sim, save_path=save)
    elif plot_type == "metrics":
        if run_dir is None:
            typer.echo("Error: --run-dir is required for metrics plots")
            raise typer.Exit(code=1)
        plot_population_timeseries(run_dir, save_path=save)
    else:
        typer.echo(f"Unknown plot type: {plot_type}. Available: frame, metrics")
        raise typer.Exit(code=1)
@app.command()
def animate(path: str, frames: int = 200, save: str = None):
    from .engine import load_scenario
    from .simulation import simulation_from_scenario
    from .viz import animate_simulation
    sim = simulation_from_scenario(load_scenario(path))
    animate_simulation(sim, frames=frames, output_path=save)
if __name__ == "__main__":
    app()
