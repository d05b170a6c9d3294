"""repoprune - Retention-based cleanup for local artifact repositories.

Decides which version directories and files of a Maven-style local
repository must be deleted to satisfy a retention policy, with a
side-effect free preview mode.
"""

__version__ = "0.1.0"
