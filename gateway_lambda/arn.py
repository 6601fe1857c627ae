"""
execute-api ARN parsing and formatting.

A method ARN, as sent by API Gateway to an authorizer, looks like:

    arn:aws:execute-api:{region}:{account}:{api-id}/{stage}/{method}/{resource-path}
"""

from pydantic import BaseModel, ConfigDict

from gateway_lambda.exceptions import MalformedArnError

ARN_FORMAT = "arn:aws:execute-api:{region}:{aws_account_id}:{rest_api_id}/{stage}/{http_method}{resource_path}"


class ArnComponents(BaseModel):
    """The parts of an execute-api method ARN."""

    model_config = ConfigDict(frozen=True)

    region: str
    aws_account_id: str
    rest_api_id: str
    stage: str
    http_method: str
    resource_path: str = ""

    def format(self) -> str:
        return format_arn(self)


def parse_arn(method_arn: str) -> ArnComponents:
    """
    Parse a method ARN into its components.

    Every slash segment after the http method is rejoined with a leading `/` to form
    the resource path, so `.../GET/pets/1` gives `/pets/1` and `.../GET/` gives `/`.

    Raises MalformedArnError when the ARN has fewer than six colon-separated
    segments or its last segment has fewer than three slash-separated parts.
    """
    if not isinstance(method_arn, str):
        raise MalformedArnError(method_arn)

    partials = method_arn.split(":", 5)
    if len(partials) < 6:
        raise MalformedArnError(method_arn)

    gateway_partials = partials[5].split("/")
    if len(gateway_partials) < 3:
        raise MalformedArnError(method_arn)

    rest_api_id, stage, http_method = gateway_partials[:3]
    resource_path = "".join("/" + segment for segment in gateway_partials[3:])

    return ArnComponents(
        region=partials[3],
        aws_account_id=partials[4],
        rest_api_id=rest_api_id,
        stage=stage,
        http_method=http_method,
        resource_path=resource_path,
    )


def format_arn(components: ArnComponents) -> str:
    """Format components back into a method ARN."""
    return ARN_FORMAT.format(
        region=components.region,
        aws_account_id=components.aws_account_id,
        rest_api_id=components.rest_api_id,
        stage=components.stage,
        http_method=components.http_method,
        resource_path=components.resource_path,
    )
