"""swarmlens.

Read-only HTTP facade over the Docker engine API:
 - list running containers
 - summarize swarm services (running vs. desired replicas, image, last update)

Every response is built from a fresh daemon query; nothing is cached or stored.
"""

__version__ = "0.1.0"
