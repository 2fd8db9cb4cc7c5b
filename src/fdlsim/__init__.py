"""
fdlsim: Force-Directed Layout Simulator

A small physics engine that lays out the nodes of a complete graph by
letting them move as mass-bearing disks.

Core concepts:
- Every body pulls on every other body with an inverse-square force
- A Barnes-Hut opening-angle test decides when far regions act as one mass
- Semi-implicit Euler integration advances velocity, then position
- Overlapping disks are pushed apart until their boundaries touch

Connections between bodies are presentation data only and never feed
back into the physics.
"""

__version__ = "0.1.0"
