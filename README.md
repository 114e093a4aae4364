# flowkit

Building blocks for tools that work with Cadence contract projects on the
Flow network. The package has no runtime dependencies.

## What it does

- **Programs** – `flowkit.program.Program` wraps a piece of Cadence source
  together with its arguments and file location. `imports()` lists the string
  imports the code makes (`import X from "./X.cdc"` as well as `import "X"`;
  address and identifier imports such as `import Crypto` are not listed),
  `has_imports()` tells whether there are any, `replace_import(source, target)`
  rewrites an import to `import X from 0x<target>` and returns the program,
  and `name()` returns the name of the single contract or contract interface
  the code declares. Source that cannot be parsed raises `ParseError`;
  `name()` raises `ValueError` when the code declares more than one
  declaration or no contract.
- **Contracts** – `flowkit.contract.Contract` is a dataclass holding a
  contract's name, location, code, account address, account name and
  arguments.
- **Import resolution** – `flowkit.imports.ImportReplacer` takes the project
  contracts and a mapping of location aliases, and `replace(program)`
  rewrites every string import in a program to the address its contract is
  deployed to. Imports by relative path are resolved against the program's
  own location with `absolute_path(base_path, relative_path)`; imports by
  contract name are matched against contract names. An import that cannot be
  resolved raises `ValueError`.
- **Deployment ordering** – `flowkit.deployment.Deployment` takes a list of
  contracts and aliases, and `sort()` returns them in an order in which every
  contract comes after everything it imports, keeping the given order where
  imports do not decide it. An import cycle raises `CyclicImportError`, whose
  `contract_names()` lists the contracts of each cycle; an import that is
  neither a project contract nor an alias raises `ValueError` naming the
  contract and the missing import. The same contract name configured more
  than once is rejected too.
- **Addresses** – `flowkit.address.Address` (with `Address.from_hex`),
  `hex_to_address` and `hex_to_id` turn hexadecimal strings into eight-byte
  account addresses and 32-byte identifiers; an address prints as sixteen
  hex digits.
- **Queries** – `flowkit.queries.block_query` turns `"latest"`, a decimal
  block height or a hex block ID into a `BlockQuery` and raises `ValueError`
  for anything else. `ScriptQuery` selects the block a script runs at, and
  `make_event_queries` splits an inclusive height range into
  `EventRangeQuery` chunks, one per event type per chunk.
- **Gateway access** – `flowkit.gateway.Gateway` is an abstract base class
  describing what a network access client must provide.
  `flowkit.events.fetch_events(gateway, names, start_height, end_height,
  worker)` fetches events for a height range with several concurrent threads
  (configured with an `EventWorker`, by default one worker and 250 blocks per
  request) and returns them in query order; `fetch_block(gateway, query)`
  resolves a `BlockQuery` to a block, raising `RuntimeError` when the
  gateway fails and `LookupError` when no block comes back.
- **Services** – `flowkit.services.update_existing_contract(flag)` returns an
  update policy that always answers `flag`, and `ProjectDeploymentError`
  collects per-contract failures (`add(contract_name, error, message)`,
  `contracts()`).

## Example

```python
from flowkit.address import Address
from flowkit.contract import Contract
from flowkit.deployment import Deployment
from flowkit.queries import block_query, make_event_queries

a = Contract("A", "A.cdc", b"pub contract A {}", Address.from_hex("0x1"), "alice")
b = Contract("B", "B.cdc", b'import A from "A.cdc"\npub contract B {}',
             Address.from_hex("0x2"), "bob")
print([c.name for c in Deployment([b, a], None).sort()])  # ['A', 'B']

latest = block_query("latest")
at_height = block_query("123456")

for q in make_event_queries(["A.Token.Deposit"], 1, 600, 250):
    print(q)
```

## What it does not do

- It has no command-line tool.
- It contains no network client: `Gateway` is only an interface, and talking
  to an access node or an emulator needs an implementation of it.
- It does not build, sign or send transactions, create accounts, generate
  keys or deploy contracts on a network; it prepares the ordering and import
  rewriting that such a deployment needs.
- It has no console logging, progress spinners or coloured output.
- It does not read or write project configuration files.

## Running the tests

```
pip install -e ".[test]"
pytest
```