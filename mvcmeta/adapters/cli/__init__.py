"""Command-line interface adapters.

Provides CLI commands for inspecting an application:
- describe_actions: Response types and formats of every action
- describe_validation: Client validation attributes of a model
"""
