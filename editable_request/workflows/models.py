"""Pydantic models describing the app manifest, its workflows and triggers."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

_SLACK_TYPE_PREFIXES = ("slack#/types/",)
_BUILTIN_TYPES = {"string", "integer", "number", "boolean", "object", "array"}


class ParameterDefinition(BaseModel):
    type: str
    title: str | None = None
    description: str | None = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value in _BUILTIN_TYPES or value.startswith(_SLACK_TYPE_PREFIXES):
            return value
        raise ValueError(f"Unsupported parameter type '{value}'")


class ParameterSchema(BaseModel):
    properties: Dict[str, ParameterDefinition] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def ensure_required_declared(self):
        unknown = [name for name in self.required if name not in self.properties]
        if unknown:
            raise ValueError(f"required parameters are not declared: {', '.join(unknown)}")
        return self


def _render_parameters(params: ParameterSchema) -> Dict[str, Any]:
    return {
        "properties": {
            name: definition.model_dump(exclude_none=True)
            for name, definition in params.properties.items()
        },
        "required": list(params.required),
    }


class FunctionDefinition(BaseModel):
    callback_id: str
    title: str
    description: str | None = None
    input_parameters: ParameterSchema = Field(default_factory=ParameterSchema)
    output_parameters: ParameterSchema = Field(default_factory=ParameterSchema)

    @property
    def reference(self) -> str:
        return f"#/functions/{self.callback_id}"


class WorkflowStep(BaseModel):
    id: str
    function_id: str
    inputs: Dict[str, Any] = Field(default_factory=dict)


class WorkflowDefinition(BaseModel):
    callback_id: str
    title: str
    description: str | None = None
    input_parameters: ParameterSchema = Field(default_factory=ParameterSchema)
    steps: List[WorkflowStep]

    @field_validator("steps")
    @classmethod
    def validate_steps(cls, value: List[WorkflowStep]) -> List[WorkflowStep]:
        if not value:
            raise ValueError("a workflow must contain at least one step")
        ids = [step.id for step in value]
        if len(set(ids)) != len(ids):
            raise ValueError("workflow step ids must be unique")
        return value

    @property
    def reference(self) -> str:
        return f"#/workflows/{self.callback_id}"


class TriggerInput(BaseModel):
    value: Any


class TriggerDefinition(BaseModel):
    type: str
    name: str
    description: str | None = None
    workflow: str
    inputs: Dict[str, TriggerInput] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in {"shortcut", "event", "scheduled", "webhook"}:
            raise ValueError(f"Unsupported trigger type '{value}'")
        return value


class AppManifest(BaseModel):
    """Subset of the Slack app manifest needed to deploy the request workflow."""

    name: str
    description: str
    bot_scopes: List[str]
    request_url: str
    functions: List[FunctionDefinition]
    workflows: List[WorkflowDefinition]

    @model_validator(mode="after")
    def ensure_steps_reference_known_functions(self):
        known = {function.reference for function in self.functions}
        for workflow in self.workflows:
            for step in workflow.steps:
                if step.function_id.startswith("#/") and step.function_id not in known:
                    raise ValueError(f"step {step.id} references unknown function {step.function_id}")
        return self

    def to_slack_manifest(self) -> Dict[str, Any]:
        """Render the manifest in the JSON layout Slack expects."""

        functions = {}
        for function in self.functions:
            functions[function.callback_id] = {
                "title": function.title,
                "description": function.description or "",
                "input_parameters": _render_parameters(function.input_parameters),
                "output_parameters": _render_parameters(function.output_parameters),
            }

        workflows = {}
        for workflow in self.workflows:
            workflows[workflow.callback_id] = {
                "title": workflow.title,
                "description": workflow.description or "",
                "input_parameters": _render_parameters(workflow.input_parameters),
                "steps": [step.model_dump() for step in workflow.steps],
            }

        return {
            "_metadata": {"major_version": 2},
            "display_information": {"name": self.name, "description": self.description},
            "features": {"bot_user": {"display_name": self.name, "always_online": True}},
            "oauth_config": {"scopes": {"bot": list(self.bot_scopes)}},
            "settings": {
                "event_subscriptions": {"request_url": self.request_url},
                "interactivity": {"is_enabled": True, "request_url": self.request_url},
                "org_deploy_enabled": True,
                "function_runtime": "remote",
            },
            "functions": functions,
            "workflows": workflows,
        }
