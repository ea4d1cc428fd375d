"""tblanalyzer - index coverage reports for flat table files."""

__version__ = "1.0.0"
