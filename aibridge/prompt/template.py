# aibridge/prompt/template.py
from __future__ import annotations
import os
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from jinja2 import TemplateSyntaxError, UndefinedError

from aibridge.prompt.messages import Message, MessageType
from aibridge.prompt.prompt import Prompt
from aibridge.prompt.resources import load_text
from aibridge.utils.templating import compile_template, literal_placeholders, template_variables


class PromptTemplateError(Exception):
    """Raised when a template is malformed or a placeholder cannot be resolved."""
    pass


class PromptTemplate:
    """
    Text with {name} placeholders that renders into a string, a Message or a Prompt.

    Variables given at construction are bound defaults; variables passed to
    render/create_message/create overlay them for that call only. Rendering
    keeps no state, so one instance can be shared between threads.

    Usage:
        tmpl = PromptTemplate("Tell me a {adjective} joke about {topic}")
        prompt = tmpl.create({"adjective": "dry", "topic": "cats"})
    """

    message_type: MessageType = MessageType.USER

    def __init__(
        self,
        template: str,
        variables: Optional[Mapping[str, Any]] = None,
        *,
        message_type: Optional[Union[MessageType, str]] = None,
    ):
        self.template = template
        self._variables: Dict[str, Any] = {str(k): v for k, v in (variables or {}).items()}
        if message_type is not None:
            self.message_type = MessageType.from_value(getattr(message_type, "value", message_type))
        try:
            self._compiled = compile_template(template)
            self._input_variables: FrozenSet[str] = frozenset(template_variables(template))
            literals = literal_placeholders(template)
        except TemplateSyntaxError as e:
            raise PromptTemplateError(f"Invalid template syntax (line {e.lineno}): {e.message}") from e
        if literals:
            names = ", ".join(sorted(literals))
            raise PromptTemplateError(
                f"Placeholder name(s) {names} are reserved words in templates (true, false, none); rename them"
            )

    @classmethod
    def from_resource(
        cls,
        location: Union[str, os.PathLike],
        variables: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> "PromptTemplate":
        return cls(load_text(location), variables, **kwargs)

    @property
    def input_variables(self) -> FrozenSet[str]:
        return self._input_variables

    @property
    def variables(self) -> Dict[str, Any]:
        return dict(self._variables)

    def with_variables(self, **variables: Any) -> "PromptTemplate":
        return type(self)(self.template, {**self._variables, **variables}, message_type=self.message_type)

    # -------- rendering --------

    def render(self, variables: Optional[Mapping[str, Any]] = None) -> str:
        data = dict(self._variables)
        if variables:
            data.update({str(k): v for k, v in variables.items()})
        missing = sorted(self._input_variables - data.keys())
        if missing:
            raise PromptTemplateError(f"Missing value for template placeholder(s): {', '.join(missing)}")
        try:
            return self._compiled.render(data)
        except UndefinedError as e:
            # e.g. an attribute lookup on a supplied value that does not exist
            raise PromptTemplateError(f"Unresolved template placeholder: {e.message}") from e

    def create_message(self, variables: Optional[Mapping[str, Any]] = None) -> Message:
        return Message(self.render(variables), self.message_type)

    def create(self, variables: Optional[Mapping[str, Any]] = None) -> Prompt:
        return Prompt(self.create_message(variables))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(template={self.template!r}, message_type={self.message_type.value!r})"


class SystemPromptTemplate(PromptTemplate):
    message_type = MessageType.SYSTEM


class AssistantPromptTemplate(PromptTemplate):
    message_type = MessageType.ASSISTANT
