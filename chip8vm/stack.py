"""CHIP-8 stack operations.

``push`` and ``pop`` are traceable; the depth checks run on the host
before a call or return is dispatched.
"""

import jax.numpy as jnp
from chip8vm.constants import STACK_SIZE
from chip8vm.errors import StackOverflow, StackUnderflow
from chip8vm.state import StackState


def check_push(stack: StackState) -> None:
    """Raise StackOverflow if the stack is full."""
    if int(stack.pointer) == STACK_SIZE:
        raise StackOverflow()


def check_pop(stack: StackState) -> None:
    """Raise StackUnderflow if the stack is empty."""
    if int(stack.pointer) == 0:
        raise StackUnderflow()


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    new_data = stack.data.at[stack.pointer].set(address)
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
