# Core building blocks: argument metadata, hook strategies, coercion and runtime.
from .arguments import UNSET, ArgumentDefinition, argument
from .argument_set import ArgumentSet
from .fields import FieldDef, FieldDescriptor, field, type_name
from .hooks import (
    CallableObjectHook,
    FunctionHook,
    IdentityHook,
    MethodHook,
    PrepareHook,
    resolve_prepare_hook,
)
from .runtime import ArgumentRuntime
from .types import InputType, resolve_input_type

__all__ = [
    'UNSET', 'ArgumentDefinition', 'argument', 'ArgumentSet',
    'FieldDef', 'FieldDescriptor', 'field', 'type_name',
    'PrepareHook', 'IdentityHook', 'MethodHook', 'FunctionHook', 'CallableObjectHook', 'resolve_prepare_hook',
    'ArgumentRuntime', 'InputType', 'resolve_input_type',
]
