"""
monitoring-ctl CLI for inspecting and probing unified-monitoring setups.
"""

import sys
import json
import yaml
from typing import List, Optional
import typer
from rich.console import Console
from rich.table import Table
from unified_monitoring.core.config import (
    ConfigMutator,
    load_settings,
    resolve,
    with_environment,
    with_logger_level,
    with_service_name,
    with_fields,
)
from unified_monitoring.core.errors import MonitoringError
from unified_monitoring.core.monitoring import Monitoring

app = typer.Typer(
    name="monitoring-ctl",
    help="unified-monitoring diagnostic CLI",
    add_completion=False
)

console = Console()

PROBE_SPAN_NAME = "monitoring-ctl.probe"
PROBE_COUNTER_NAME = "monitoring_ctl_probe_total"


def build_mutators(
    config_file: Optional[str] = None,
    service_name: Optional[str] = None,
    environment: Optional[str] = None,
    logger_level: Optional[str] = None,
    tracer_provider: Optional[str] = None,
    metric_provider: Optional[str] = None
) -> List[ConfigMutator]:
    """Collect mutators from settings sources, then command-line overrides."""
    mutators = load_settings(config_file).to_mutators()

    if service_name:
        mutators.append(with_service_name(service_name))
    if environment:
        mutators.append(with_environment(environment))
    if logger_level:
        mutators.append(with_logger_level(logger_level))
    # Provider overrides keep the host and port from settings
    if tracer_provider:
        mutators.append(with_fields(tracer_provider=tracer_provider))
    if metric_provider:
        mutators.append(with_fields(metric_provider=metric_provider))

    return mutators


@app.command()
def config(
    output: str = typer.Option("table", "-o", help="Output format: table, json, yaml"),
    config_file: Optional[str] = typer.Option(None, "--config-file", help="Configuration file path"),
    service_name: Optional[str] = typer.Option(None, "--service-name", help="Service name"),
    environment: Optional[str] = typer.Option(None, "--environment", help="Deployment environment"),
    logger_level: Optional[str] = typer.Option(None, "--logger-level", help="Log level"),
    tracer_provider: Optional[str] = typer.Option(None, "--tracer-provider", help="Tracer provider: stdout, otlp"),
    metric_provider: Optional[str] = typer.Option(None, "--metric-provider", help="Metric provider: stdout, otlp, prometheus")
):
    """Show the resolved monitoring configuration."""
    try:
        resolved = resolve(build_mutators(
            config_file, service_name, environment, logger_level, tracer_provider, metric_provider
        ))
    except MonitoringError as e:
        console.print(f"[red]✗[/red] Failed to load configuration: {e}")
        sys.exit(1)

    data = resolved.model_dump()

    if output == "json":
        print(json.dumps(data, indent=2))
    elif output == "yaml":
        print(yaml.dump(data, default_flow_style=False))
    else:  # table
        table = Table(title="Monitoring Configuration")
        table.add_column("Field", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        for field, value in data.items():
            table.add_row(field, str(value))

        console.print(table)


@app.command()
def probe(
    config_file: Optional[str] = typer.Option(None, "--config-file", help="Configuration file path"),
    service_name: Optional[str] = typer.Option(None, "--service-name", help="Service name"),
    environment: Optional[str] = typer.Option(None, "--environment", help="Deployment environment"),
    logger_level: Optional[str] = typer.Option(None, "--logger-level", help="Log level"),
    tracer_provider: Optional[str] = typer.Option(None, "--tracer-provider", help="Tracer provider: stdout, otlp"),
    metric_provider: Optional[str] = typer.Option(None, "--metric-provider", help="Metric provider: stdout, otlp, prometheus")
):
    """Initialize monitoring, emit one span, counter and log line, then shut down."""
    try:
        mutators = build_mutators(
            config_file, service_name, environment, logger_level, tracer_provider, metric_provider
        )
        with Monitoring.create(*mutators) as monitoring:
            context, span = monitoring.tracer.start_span(PROBE_SPAN_NAME)

            log = monitoring.logger.with_span_context(span.get_span_context())
            log.info("Probe started", {"command": "probe"})

            counter = monitoring.metric.create_counter(
                PROBE_COUNTER_NAME,
                unit="1",
                description="Number of monitoring-ctl probes"
            )
            monitoring.metric.record_counter(counter, 1, {"command": "probe"})

            carrier = monitoring.tracer.inject_context(context)
            monitoring.tracer.end_span(span)
            monitoring.flush()
    except (MonitoringError, ValueError) as e:
        console.print(f"[red]✗[/red] Probe failed: {e}")
        sys.exit(1)

    if not carrier:
        console.print("[yellow]No trace context injected[/yellow]")
    else:
        table = Table(title="Propagated Trace Context")
        table.add_column("Header", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        for header, values in carrier.items():
            table.add_row(header, ", ".join(values))

        console.print(table)

    console.print("[green]✓[/green] Probe completed")


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
