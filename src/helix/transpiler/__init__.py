"""Forms -> JS transpiler with a pure data node AST."""

# Errors
from helix.errors import TranspileError as TranspileError

# ID generation
from helix.transpiler.id import gensym as gensym
from helix.transpiler.id import next_id as next_id
from helix.transpiler.id import reset_id_counter as reset_id_counter

# Expression nodes
from helix.transpiler.nodes import Array as Array
from helix.transpiler.nodes import Arrow as Arrow

# Statement nodes
from helix.transpiler.nodes import Assign as Assign
from helix.transpiler.nodes import AssignMember as AssignMember
from helix.transpiler.nodes import Binary as Binary
from helix.transpiler.nodes import Block as Block
from helix.transpiler.nodes import Call as Call
from helix.transpiler.nodes import Comment as Comment
from helix.transpiler.nodes import Export as Export
from helix.transpiler.nodes import ExprNode as ExprNode
from helix.transpiler.nodes import ExprStmt as ExprStmt
from helix.transpiler.nodes import Function as Function
from helix.transpiler.nodes import Identifier as Identifier
from helix.transpiler.nodes import If as If
from helix.transpiler.nodes import Import as Import
from helix.transpiler.nodes import Literal as Literal
from helix.transpiler.nodes import Member as Member
from helix.transpiler.nodes import New as New
from helix.transpiler.nodes import Node as Node
from helix.transpiler.nodes import Object as Object
from helix.transpiler.nodes import Return as Return
from helix.transpiler.nodes import StmtNode as StmtNode
from helix.transpiler.nodes import Subscript as Subscript
from helix.transpiler.nodes import Ternary as Ternary
from helix.transpiler.nodes import Throw as Throw
from helix.transpiler.nodes import Transformer as Transformer
from helix.transpiler.nodes import Unary as Unary

# Emit
from helix.transpiler.nodes import emit as emit
from helix.transpiler.nodes import emit_program as emit_program
from helix.transpiler.nodes import transformer as transformer

# Transpiler
from helix.transpiler.transpiler import RUNTIME_NAMES as RUNTIME_NAMES
from helix.transpiler.transpiler import Transpiler as Transpiler
