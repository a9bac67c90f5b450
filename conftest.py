# Ignore docstrings for this file
# pylint: disable=missing-docstring


import os

import pytest

from abiclient.test_fixtures import (
    echo_client,
    mock_query_backend,
    mock_transaction_backend,
    read_connection,
    read_write_connection,
    token_definition,
    token_read_client,
    token_read_write_client,
)

# Allows the vscode debugger to throw exceptions immediately
# instead of pytest catching the exception and reporting it.
# Set `_PYTEST_RAISE=1` in the environment of the debug configuration.
if os.getenv("_PYTEST_RAISE", "0") != "0":

    @pytest.hookimpl(tryfirst=True)
    def pytest_exception_interact(call):
        raise call.excinfo.value

    @pytest.hookimpl(tryfirst=True)
    def pytest_internalerror(excinfo):
        raise excinfo.value


# Importing all fixtures here and defining here
# This allows for users of fixtures to not have to import all dependency fixtures when running
# NOTE: this means pytest can only be ran from this directory
__all__ = [
    "echo_client",
    "mock_query_backend",
    "mock_transaction_backend",
    "read_connection",
    "read_write_connection",
    "token_definition",
    "token_read_client",
    "token_read_write_client",
]
