"""helix: compile component definitions to React element and class calls."""

# Component compilers
from helix.class_component import compile_class as compile_class
from helix.component import compile_functional as compile_functional

# Definitions
from helix.definition import ClassDefinition as ClassDefinition
from helix.definition import CompiledDefinition as CompiledDefinition
from helix.definition import ComponentDefinition as ComponentDefinition
from helix.definition import FunctionalDefinition as FunctionalDefinition
from helix.definition import RegisterEffect as RegisterEffect
from helix.definition import SignatureEffect as SignatureEffect
from helix.definition import compile_definition as compile_definition
from helix.definition import parse_definition as parse_definition

# Element construction
from helix.element import ElementCall as ElementCall
from helix.element import expand_element as expand_element
from helix.env import env as env

# Errors
from helix.errors import CompileError as CompileError
from helix.errors import ReadError as ReadError
from helix.errors import ShapeError as ShapeError
from helix.errors import TranspileError as TranspileError

# Forms
from helix.forms import FormList as FormList
from helix.forms import FormMap as FormMap
from helix.forms import FormSet as FormSet
from helix.forms import Keyword as Keyword
from helix.forms import Symbol as Symbol
from helix.forms import Vector as Vector
from helix.forms import pr_str as pr_str

# Hooks
from helix.hooks import HookSignature as HookSignature
from helix.hooks import find_hooks as find_hooks
from helix.hooks import is_hook as is_hook

# Module compiler
from helix.module import CompiledModule as CompiledModule
from helix.module import compile_forms as compile_forms
from helix.module import compile_module as compile_module

# Names
from helix.names import camel_case as camel_case
from helix.names import munge as munge
from helix.options import CompilerOptions as CompilerOptions

# Props
from helix.props import ConvertValue as ConvertValue
from helix.props import DynamicPlan as DynamicPlan
from helix.props import StaticPlan as StaticPlan
from helix.props import compile_props as compile_props
from helix.props import key_to_native_prop as key_to_native_prop

# Reader
from helix.reader import read_one as read_one
from helix.reader import read_string as read_string

__version__ = "0.1.0"
