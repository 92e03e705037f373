"""Template-based prose summaries of endpoint records."""

from typing import List

from swagger_explorer.parser.models import EndpointRecord, ParameterRecord


def _describe_parameters(parameters: List[ParameterRecord]) -> str:
    return ", ".join(f"{param.name} ({param.location})" for param in parameters)


def summarize(record: EndpointRecord) -> str:
    """Describe an endpoint in one or more plain sentences.

    Every clause is omitted when the data behind it is absent, so a record
    with neither parameters nor responses reads ``The GET /health endpoint.``
    """
    text = f"The {record.method} {record.path} endpoint"

    if record.summary:
        text += f" {record.summary.lower()}"
    elif record.description:
        text += f" {record.description.lower()}"

    required = record.required_parameters
    if required:
        text += f". It requires {_describe_parameters(required)}"

    optional = record.optional_parameters
    if optional:
        text += f". Optional parameters include {_describe_parameters(optional)}"

    if record.request_body is not None:
        text += ". It accepts a request body"
        if record.request_body.required:
            text += " (required)"

    success_codes = [code for code in record.responses if code.startswith("2")]
    if success_codes:
        text += f". Success responses include {', '.join(success_codes)}"

    return text + "."
