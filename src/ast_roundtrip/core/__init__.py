"""
Round-Trip Orchestrator Core.

- ``models``: values flowing through the pipeline.
- ``comparator``: the export -> import -> export round trip.
- ``aggregator``: statistics and termination policy.
- ``walker``: corpus discovery and the driving loop.
"""
