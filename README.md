# jmlang

jmlang is a small, JSON-flavoured expression language. A program
describes one value, can compute it from other values, and can be fed
JSON documents from files or web addresses as named variables. The
result is printed or saved as JSON.

## Installing

```
pip install .
```

This installs the `jml` command and the `jmlang` package. There are no
dependencies beyond the standard library; the tests need `pytest` and
`hypothesis` (`pip install .[test]`).

## The language

A program has an optional header of bindings, a `---` separator, and a
body expression whose value is the result:

```
users = [
    { "id": 1, "name": "Alice" },
    { "id": 2, "name": "Bob" }
]
limit = 10;
---
if limit > 5 then users[1].name else "nobody"
```

A binding may end with `;`. Bindings are evaluated lazily: a name's
expression is evaluated each time the name is used. Without a header,
the whole program is just the body expression:

```
(1 + 2) * 3
```

### Values and literals

- `null`, `true`, `false`.
- Integers (64-bit) such as `42`, and floats such as `1.5`, `1e10`,
  `1.23e+10`.
- Strings in double quotes. The text between the quotes is taken as
  written; escape sequences such as `\n` are not decoded.
- Lists `[1, 2, 3]`.
- Objects `{ "key": value, name: value }`. A key is a bare name, or an
  expression giving a string, an integer or a float (numbers become their
  text). Keys keep their order; a repeated key keeps its first position
  and takes the last value.

The words `String`, `Float`, `Bool`, `Int`, `Array`, `Object` and `Null`
are reserved and cannot be used as names.

### Operators

From lowest to highest precedence:

| Operators            | Meaning                                         |
|----------------------|-------------------------------------------------|
| `\|\|`               | logical or, on booleans                         |
| `&&`                 | logical and, on booleans                        |
| `==` `!=`            | structural equality on any values               |
| `<` `>` `<=` `>=`    | ordering on numbers, booleans and strings       |
| `++`                 | concatenation                                   |
| `+` `-`              | addition, subtraction                           |
| `*` `/` `%`          | multiplication, division, remainder             |
| `^`                  | power (right-associative)                       |
| `-` `!` (prefix)     | negation of a number, negation of a boolean     |
| `x[i]` `x.key` `f()` | indexing, field access, function call           |

- Integers and floats mix freely; an operation on two integers gives an
  integer, otherwise a float. Integer division and remainder truncate
  toward zero.
- Dividing (or taking the remainder) by zero is an error. Integer
  results that do not fit in 64 bits are an overflow error.
- Values of different types are never equal (`1 == 1.0` is `false`).
- `++` joins strings, appends lists, and merges objects, with keys from
  the right-hand object winning.

### Access

`list[0]`, `"text"[0]` (a one-character string), `object["key"]` and
`object.key`. An index or key that is not there gives `null`. Lists and
strings need an integer index, objects a string key.

### Conditionals

`if cond then a else b`. The condition must be a boolean.

### Functions

Functions are written `fn (a, b) => a + b` or `\a, b => a + b` and
called as `f(1, 2)`. A call with the wrong number of arguments is an
error.

Built-in functions:

- `map(list, f)`: `f` applied to every element.
- `filter(list, f)`: the elements for which `f` returns `true`.
- `reduce(list, acc, f)`: folds the list, calling `f(element, acc)`.
- `pluck(object)`: a list of `{ "key": ..., "value": ... }` objects.
- `log(message, value)`: prints `message : value` and returns `value`.

```
nums = [1, 2, 3, 4]
---
reduce(filter(nums, \n => n % 2 == 0), 0, \x, acc => x + acc)
```

### Comments

`//` starts a comment that runs to the end of the line. A `#` also
starts a comment, but only when a newline follows it.

## Command line

```
jml run --file program.jml
```

evaluates `program.jml` and prints the result as JSON indented by two
spaces.

Options of `run`:

- `-f`, `--file PATH`: the program to run (required).
- `-o`, `--output PATH`: write the JSON result to this file instead of
  printing it.
- `-v`, `--variables NAME=PATH`: bind a variable to a JSON document read
  from a file, or from an address starting with `http://` or `https://`.
  Repeat the option for more variables.

A global `-l`, `--log` flag, given before `run`, turns on progress
logging to standard error.

```
jml --log run --file report.jml --variables users=users.json --output report.json
```

On a parse error, an evaluation error, a file that cannot be read, or a
result that cannot be written as JSON (such as a function), `jml` prints
a message to standard error and exits with status 1. Evaluation errors
show the offending line of the program with the failing part marked.
Non-finite floats are written as `null`.

## From Python

```python
from jmlang.parser import parse
from jmlang.interpreter import eval_with_source

source = "numbers = [1, 2, 3]\n---\nnumbers[0] + numbers[1] + numbers[2]"
result = eval_with_source(parse(source), source)
print(result)  # 6
```

Results are plain Python values: `None`, `bool`, `int`, `float`, `str`,
`list`, `dict`, or a `jmlang.values.Lambda` for functions.

- `jmlang.parser`: `parse`, `parse_statement` and `parse_expression`
  build a tree of `jmlang.ast` nodes; malformed input raises
  `ParseError`.
- `jmlang.lexer`: `tokenize` and `Lexer` give `(start, token, end)`
  triples; bad input raises a `LexingError`.
- `jmlang.interpreter`: `eval_with_source` evaluates in a fresh
  `jmlang.context.Context`; `eval_with_ctx` and `eval_with_ctx_source`
  evaluate in a context you supply, after binding the built-ins there.
  To provide variables, call `bind_value` on the context first.
- `jmlang.errors`: evaluation failures raise `JmlTypeError` or
  `JmlRuntimeError` (both `EvalError`), with `.span` (offset, length)
  and `.kind` describing the failure. `render(source)` formats the error
  with the marked source line.
- `jmlang.values`: `from_json` and `to_json` convert between JSON data
  and language values; `display` gives a value's text.