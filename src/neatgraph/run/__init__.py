"""
NEAT Run Package

This package holds the run-level helpers of neatgraph: configuration management
and the mutation of many genomes in parallel.

Modules:
    config:   Configuration management for NEAT parameters
    parallel: Thread-parallel mutation of many genomes sharing one registry

Exported Classes:
    Config: Configuration parameters for the NEAT algorithm
"""

from neatgraph.run.config import Config

__all__ = ['Config']
