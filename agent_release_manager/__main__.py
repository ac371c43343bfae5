from agent_release_manager.configuration.cli import typer_app

typer_app()
