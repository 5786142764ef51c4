# coding=utf-8
#

"""
 Copyright (c) 2021, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Conditional expressions over a build context.

 A condition is a closed set of node types: Literal, Equals, And, Or, Not.
 Entries of requirement lists are plain strings or Conditional objects that
 wrap a condition with a payload. Everything here is immutable and
 evaluation is a pure function of an expression and a context.
"""

import re
from collections import namedtuple

from tplan.constants import CONTEXT_KEYS
from tplan.pyutils import maptype, stringtype
from tplan.error import ExpressionSyntaxError, UnknownContextKey

def _nodetype(typename, fields, **kwargs):
    """
    Make immutable node type. Unlike plain namedtuple, nodes of different
    types are never equal: And((a, b)) != Or((a, b)).
    """

    base = namedtuple(typename, fields, **kwargs)

    def __eq__(self, other):
        return type(self) is type(other) and tuple.__eq__(self, other)

    def __ne__(self, other):
        return not __eq__(self, other)

    def __hash__(self):
        return hash((typename, tuple.__hash__(self)))

    namespace = {
        '__slots__' : (),
        '__eq__'    : __eq__,
        '__ne__'    : __ne__,
        '__hash__'  : __hash__,
    }
    return type(typename, (base,), namespace)

Literal = _nodetype('Literal', 'value')
Equals = _nodetype('Equals', 'key, value')
And = _nodetype('And', 'operands')
Or = _nodetype('Or', 'operands')
Not = _nodetype('Not', 'operand')

Conditional = _nodetype('Conditional', 'condition, then, otherwise', defaults = (None,))

TRUE = Literal(True)
FALSE = Literal(False)

CONDITION_TYPES = (Literal, Equals, And, Or, Not)

_KEYWORDS = frozenset(('and', 'or', 'not', 'true', 'false'))

_RE_TOKEN = re.compile(r"""
    \s*(?:
        (?P<op>==|!=|\(|\))
        |(?P<str>'[^']*'|"[^"]*")
        |(?P<word>[^\s()=!'"]+)
    )""", re.VERBOSE)
_RE_KEY = re.compile(r'^[A-Za-z_][\w-]*$')

Token = namedtuple('Token', 'kind, value, pos')

def _tokenize(text):

    tokens = []
    pos = 0
    end = len(text.rstrip())
    while pos < end:
        match = _RE_TOKEN.match(text, pos)
        if match is None:
            start = pos + len(text[pos:]) - len(text[pos:].lstrip())
            raise ExpressionSyntaxError(text, start, "unexpected character %r" % text[start])

        kind = match.lastgroup
        value = match.group(kind)
        tokpos = match.start(kind)
        if kind == 'str':
            value = value[1:-1]
        elif kind == 'word' and value in _KEYWORDS:
            kind = value
        tokens.append(Token(kind, value, tokpos))
        pos = match.end()

    tokens.append(Token('end', None, len(text)))
    return tokens

class _Parser(object):
    """
    Recursive descent parser:
        or-expr  := and-expr ('or' and-expr)*
        and-expr := not-expr ('and' not-expr)*
        not-expr := 'not' not-expr | atom
        atom     := '(' or-expr ')' | 'true' | 'false' | key ('=='|'!=') value
    """

    __slots__ = ('_text', '_tokens', '_idx')

    def __init__(self, text):
        self._text = text
        self._tokens = _tokenize(text)
        self._idx = 0

    def _peek(self):
        return self._tokens[self._idx]

    def _next(self):
        token = self._tokens[self._idx]
        self._idx += 1
        return token

    def _fail(self, token, reason):
        raise ExpressionSyntaxError(self._text, token.pos, reason)

    def parse(self):
        """ Parse the whole text """

        if self._peek().kind == 'end':
            self._fail(self._peek(), 'empty expression')

        node = self._parseOr()
        token = self._peek()
        if token.kind != 'end':
            self._fail(token, 'unexpected %r' % token.value)
        return node

    def _parseOr(self):
        operands = [self._parseAnd()]
        while self._peek().kind == 'or':
            self._next()
            operands.append(self._parseAnd())
        return operands[0] if len(operands) == 1 else Or(tuple(operands))

    def _parseAnd(self):
        operands = [self._parseNot()]
        while self._peek().kind == 'and':
            self._next()
            operands.append(self._parseNot())
        return operands[0] if len(operands) == 1 else And(tuple(operands))

    def _parseNot(self):
        if self._peek().kind == 'not':
            self._next()
            return Not(self._parseNot())
        return self._parseAtom()

    def _parseAtom(self):

        token = self._next()
        kind = token.kind

        if kind == 'op' and token.value == '(':
            node = self._parseOr()
            closing = self._next()
            if closing.kind != 'op' or closing.value != ')':
                self._fail(closing, "expected ')'")
            return node

        if kind in ('true', 'false'):
            return TRUE if kind == 'true' else FALSE

        if kind != 'word':
            what = 'end of expression' if kind == 'end' else repr(token.value)
            self._fail(token, 'expected context key, got %s' % what)

        if not _RE_KEY.match(token.value):
            self._fail(token, 'invalid context key %r' % token.value)

        operator = self._next()
        if operator.kind != 'op' or operator.value not in ('==', '!='):
            self._fail(operator, "expected '==' or '!=' after %r" % token.value)

        value = self._next()
        if value.kind not in ('word', 'str', 'true', 'false'):
            self._fail(value, 'expected value to compare with %r' % token.value)

        node = Equals(token.value, value.value)
        return node if operator.value == '==' else Not(node)

def parse(text):
    """
    Parse text of a condition into a condition node.
    Raise ExpressionSyntaxError if the text is invalid.
    """

    return _Parser(text).parse()

def makeCondition(raw):
    """
    Make condition node from declaration data: text, bool or ready node
    """

    if isinstance(raw, CONDITION_TYPES):
        return raw
    if isinstance(raw, bool):
        return TRUE if raw else FALSE
    if isinstance(raw, stringtype):
        return parse(raw)

    msg = "Condition must be a string or bool, got %r" % (raw,)
    raise ExpressionSyntaxError(repr(raw), 0, msg, msg)

def _freezePayload(value):
    if value is None or isinstance(value, stringtype):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(_freezeScalar(x) for x in value)
    return _freezeScalar(value)

def _freezeScalar(value):
    if isinstance(value, (maptype, list, tuple, set)):
        msg = "Payload of conditional entry must be a string or a list of strings, got %r" \
                % (value,)
        raise ExpressionSyntaxError(repr(value), 0, msg, msg)
    return value if isinstance(value, stringtype) else str(value)

def makeEntry(raw):
    """
    Make requirement entry from declaration data.
    A string stays as is. A mapping with the keys 'if', 'then' and optional
    'else' becomes a Conditional.
    """

    if isinstance(raw, (stringtype, Conditional)):
        return raw

    if isinstance(raw, maptype):
        if 'if' not in raw or 'then' not in raw:
            msg = "Conditional entry must have 'if' and 'then': %r" % (dict(raw),)
            raise ExpressionSyntaxError(repr(dict(raw)), 0, msg, msg)
        return Conditional(makeCondition(raw['if']),
                           _freezePayload(raw['then']),
                           _freezePayload(raw.get('else')))

    return str(raw)

def usedKeys(node):
    """
    Return tuple of unique context keys used in the condition node
    in order of the first appearance.
    """

    result = []

    def collect(node):
        if isinstance(node, Equals):
            if node.key not in result:
                result.append(node.key)
        elif isinstance(node, (And, Or)):
            for operand in node.operands:
                collect(operand)
        elif isinstance(node, Not):
            collect(node.operand)

    collect(node)
    return tuple(result)

def _evalNode(node, context):

    if isinstance(node, Equals):
        return context.value(node.key) == node.value
    if isinstance(node, And):
        return all(_evalNode(x, context) for x in node.operands)
    if isinstance(node, Or):
        return any(_evalNode(x, context) for x in node.operands)
    if isinstance(node, Not):
        return not _evalNode(node.operand, context)
    return bool(node.value)

def evalCondition(node, context):
    """
    Evaluate the condition node against the build context.
    Any key that is not in the context key set raises UnknownContextKey
    even if the evaluation doesn't reach it. A known but unset key
    raises UnsetContextKey only when it's actually evaluated.
    """

    for key in usedKeys(node):
        if key not in CONTEXT_KEYS:
            raise UnknownContextKey(key)

    return _evalNode(node, context)

def evaluate(entry, context):
    """
    Evaluate the requirement entry against the context.
    Return the payload if the condition is true, 'else' payload otherwise,
    None if there is nothing. A plain string is returned as is.
    """

    if not isinstance(entry, Conditional):
        return entry

    if evalCondition(entry.condition, context):
        return entry.then
    return entry.otherwise

def resolveEntries(entries, context):
    """
    Evaluate all entries and return flat list of concrete string values
    """

    result = []
    for entry in entries:
        value = evaluate(entry, context)
        if value is None:
            continue
        if isinstance(value, stringtype):
            result.append(value)
        else:
            result.extend(value)
    return result

def render(node):
    """ Return text representation of the condition node """

    if isinstance(node, Equals):
        return '%s == %r' % (node.key, node.value)
    if isinstance(node, (And, Or)):
        sep = ' and ' if isinstance(node, And) else ' or '
        return '(%s)' % sep.join(render(x) for x in node.operands)
    if isinstance(node, Not):
        return 'not %s' % render(node.operand)
    return 'true' if node.value else 'false'
