"""
Keypad Calc - Button-Driven Arithmetic Evaluator

A small calculator built around a pure expression engine:
tokenizer -> infix-to-postfix conversion -> postfix evaluation -> numeric
normalization. A keypad session owns the expression buffer and feeds it to
the engine; a terminal keypad and an HTTP API expose the session.
"""

__version__ = "1.0.0"
__author__ = "Keypad Calc Team"
