"""
Application Layer

Contains the command interpreter, the playback adapter, and supporting services.
This layer orchestrates domain objects and infrastructure ports to serve commands.

Structure:
- commands/: The interaction state machine and the play use case
- services/: Session store, engine lifecycle, and the playback engine adapter
- interfaces/: Port interfaces for infrastructure adapters
"""
