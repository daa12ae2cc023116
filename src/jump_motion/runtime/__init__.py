"""Runtime services: telemetry, configuration and host integration."""
