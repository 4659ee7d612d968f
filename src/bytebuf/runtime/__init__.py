"""Runtime services shared by the buffer layer: telemetry and limits."""
