# SPDX-License-Identifier: MIT


class ClientDeskError(Exception):
    """Base class for failures raised by clientdesk."""


class InvalidDueDateError(ClientDeskError, ValueError):
    def __init__(self, value: object) -> None:
        super().__init__(f"invalid calendar date: {value!r}")
        self.value = value


class CsvImportError(ClientDeskError):
    """The uploaded CSV file cannot be imported as a whole."""


class TaskNotFoundError(ClientDeskError, KeyError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id

    def __str__(self) -> str:
        return str(self.args[0])


class ClientNotFoundError(ClientDeskError, KeyError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"client not found: {client_id}")
        self.client_id = client_id

    def __str__(self) -> str:
        return str(self.args[0])
