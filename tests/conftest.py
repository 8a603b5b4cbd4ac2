"""Test configuration and fixtures."""

import logfire

# Keep spans local; instrumentation in create_app needs a configured logfire
logfire.configure(send_to_logfire=False, console=False)
