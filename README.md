# nnlite

A small neural-network library in pure Python with no third-party dependencies.
It has tensors of rank 0, 1 and 2 and reverse-mode automatic differentiation.
It also has the pieces needed to define and train a simple feed-forward
classifier: layers, losses, an SGD optimizer, and a binary file format for
saved parameters.

## Installation

```
pip install .
```

To install the test requirements as well, run `pip install .[test]`.

## Modules

### `nnlite.tensor`

`Tensor(data, requires_grad=False, gradfn=None, parents=())` holds a scalar, a
vector or a matrix of single-precision floats. The values are stored flat in
row-major order. You can build one from a number, a list of numbers or a list
of equal-length rows. Rows of different lengths raise `ValueError`.

- `shape` and `stride` are tuples: `()`, `(n,)` or `(rows, cols)` for the shape,
  and `()`, `(1,)` or `(cols, 1)` for the stride.
- `t[i]` indexes a vector and `t[i, j]` indexes a matrix. Both reading and
  writing work. An index out of range raises `IndexError`. The wrong number of
  indices, or any index into a scalar, raises `ValueError`.
- `item()` returns the value of a tensor that has exactly one element.
- `numel()` gives the number of elements. `data` is the flat value array, and
  assigning to it replaces the values; the new values must have the same length.
- `a + b` adds element-wise. When either operand is a scalar, it is broadcast
  against the other operand. Otherwise both tensors must have the same shape.
- `a @ b` multiplies. It supports vector·vector (the result is a scalar),
  matrix·vector, vector·matrix and matrix·matrix. The inner dimensions must
  agree, and neither operand may be a scalar.
- With `requires_grad=True`, a tensor collects gradients in `grad`.
  `backward()` works only on a scalar result. It seeds that result's gradient
  with 1 and passes gradients back through the graph, adding them onto what
  each tensor already holds. `zero_grad()` clears a gradient, and
  `add_to_grad()` adds to it.
- `str(t)` prints a scalar with `%g` formatting. Vectors and matrices print as
  bracketed lists with six decimal places.

### `nnlite.ops`

`add(a, b)` and `matmul(a, b)` are function forms of `a + b` and `a @ b`. Plain
numbers and nested lists are converted to tensors before the operation.

### `nnlite.module`

`Module` is the base class for layers and models. A module is called like a
function, and the call runs `forward(input)`. It provides:

- `register_parameter(name, tensor)` and `register_module(name, module)`. A
  duplicate name raises `ValueError`.
- `parameters()`: a list of `(name, tensor)` pairs. The module's own parameters
  come first, followed by those of its sub-modules. Sub-module parameters get
  dotted names, for example `linear_1.weight`.
- `state_dict()`: the same pairs as a dict.
- `load_state_dict(state_dict)`: copies the stored values into matching
  parameters. A name that is missing triggers a warning and is skipped. A
  shape mismatch raises `ValueError`.

### Layers

- `nnlite.flatten.Flatten` turns any tensor into a vector, in row-major order.
- `nnlite.relu.Relu` computes `max(x, 0)` element-wise on scalars, vectors and
  matrices.
- `nnlite.softmax.Softmax` turns a vector into probabilities. The softmax of a
  scalar is 1. A matrix raises `ValueError`.
- `nnlite.linear.Linear(in_features, out_features, seed=7)` computes
  `input @ weight + bias`. The weight has shape `(in_features, out_features)`.
  `reset_parameters()` fills the weight with uniform values in
  `±sqrt(2)·sqrt(3 / in_features)`, drawn from a Mersenne Twister seeded with
  `seed`, so the same seed always gives the same weights. The bias starts at
  zero.

### `nnlite.loss`

`NLLLoss` and `CrossEntropyLoss` are called as `loss(input, target)`. `input`
is a vector and `target` is an integer class index.

- `NLLLoss` returns `-log(input[target])`. The probability is clamped to at
  least `1e-12`.
- `CrossEntropyLoss` applies `Softmax` and then `NLLLoss`.
- An input that is not a vector raises `ValueError`. A target outside the
  vector raises `IndexError`.

### `nnlite.sgd`

`SGD(params, lr=0.001)` takes `(name, tensor)` pairs, such as the output of
`Module.parameters()`.

- `step()` subtracts `lr × grad` from every parameter that tracks gradients.
- `zero_grad()` clears their gradients.

### `nnlite.serialization`

`save(state_dict, filename)` writes named tensors to a binary file, and
`load(filename)` reads them back into a dict of tensors.

The file layout is as follows. It starts with a little-endian 32-bit magic
number, 777. Each tensor then follows as:

1. the name length and the UTF-8 name,
2. the rank and the dimensions,
3. the element count and the float32 values.

Lengths and dimensions are unsigned 64-bit integers. A wrong magic number, a
truncated record or a rank above 2 raises `ValueError`.

## Example

```python
from nnlite.tensor import Tensor
from nnlite.linear import Linear
from nnlite.relu import Relu
from nnlite.loss import CrossEntropyLoss
from nnlite.sgd import SGD
from nnlite.serialization import save, load

linear = Linear(3, 2, 7)
relu = Relu()
x = Tensor([1.0, 2.0, 3.0])

optimizer = SGD(linear.parameters(), 0.01)
loss = CrossEntropyLoss()(relu(linear(x)), 1)
loss.backward()
optimizer.step()
optimizer.zero_grad()

save(linear.state_dict(), "linear.nn")
restored = Linear(3, 2, 42)
restored.load_state_dict(load("linear.nn"))
```

## Command line

```
nnlite [--seed N]
```

The command builds `nnlite.cli.NeuralNetwork`, a network for 28×28 inputs. The
network flattens the input and applies `Linear` layers of sizes 784→512,
512→512 and 512→10, with `Relu` between them. The command feeds the network
one random 28×28 input and prints the ten output values. `--seed` fixes the
random input; the layer weights always come from their default seed.

## Limitations

- Tensors have at most two dimensions, and there is no batching.
- Operations are plain Python loops, so large layers are slow.
- The command only runs one forward pass on random input. It does not load a
  dataset, train, or save or load a model; training and storage are available
  only through the library.