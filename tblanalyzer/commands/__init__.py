"""CLI commands for tblanalyzer."""
