import pytest

from flowkit.address import Address
from flowkit.contract import Contract
from flowkit.deployment import CyclicImportError, Deployment

CONTRACT_A = ("ContractA.cdc", b"pub contract ContractA {}", "0x01")
CONTRACT_B = ("ContractB.cdc", b"pub contract ContractB {}", "0x02")
CONTRACT_C = (
    "ContractC.cdc",
    b"""
        import ContractA from "ContractA.cdc"
    
        pub contract ContractC {}
    """,
    "0x03",
)
CONTRACT_D = (
    "ContractD.cdc",
    b"""
        import ContractC from "ContractC.cdc"

        pub contract ContractD {}
    """,
    "0x04",
)
CONTRACT_E = (
    "ContractE.cdc",
    b"""
        import ContractF from "ContractF.cdc"

        pub contract ContractE {}
    """,
    None,
)
CONTRACT_F = (
    "ContractF.cdc",
    b"""
        import ContractE from "ContractE.cdc"

        pub contract ContractF {}
    """,
    "0x05",
)
CONTRACT_G = (
    "ContractG.cdc",
    b"""
        import ContractA from "ContractA.cdc"
        import ContractB from "ContractB.cdc"

        pub contract ContractG {}
    """,
    "0x06",
)
CONTRACT_H = (
    "ContractH.cdc",
    b"""
        import ContractFoo from "Foo.cdc"

        pub contract ContractH {}
    """,
    "0x07",
)


def build(specs):
    contracts = []
    for location, code, address in specs:
        account = Address.from_hex(address) if address else Address()
        contracts.append(Contract(location.split(".")[0], location, code, account, "", None))
    return contracts


@pytest.mark.parametrize(
    "specs, expected",
    [
        ([], []),
        ([CONTRACT_A], [CONTRACT_A]),
        ([CONTRACT_A, CONTRACT_B], [CONTRACT_A, CONTRACT_B]),
        ([CONTRACT_A, CONTRACT_C], [CONTRACT_A, CONTRACT_C]),
        ([CONTRACT_A, CONTRACT_C, CONTRACT_D], [CONTRACT_A, CONTRACT_C, CONTRACT_D]),
        ([CONTRACT_A, CONTRACT_B, CONTRACT_G], [CONTRACT_A, CONTRACT_B, CONTRACT_G]),
    ],
    ids=[
        "no contracts",
        "single contract no imports",
        "two contracts no imports",
        "two contracts with imports",
        "three contracts with imports",
        "single contract with two imports",
    ],
)
def test_deployment_order(specs, expected):
    sorted_contracts = Deployment(build(specs), None).sort()
    assert [c.location for c in sorted_contracts] == [spec[0] for spec in expected]


def test_dependencies_listed_after_dependents_are_reordered():
    sorted_contracts = Deployment(build([CONTRACT_D, CONTRACT_C, CONTRACT_A]), None).sort()
    assert [c.name for c in sorted_contracts] == ["ContractA", "ContractC", "ContractD"]


def test_import_cycle():
    with pytest.raises(CyclicImportError) as info:
        Deployment(build([CONTRACT_E, CONTRACT_F]), None).sort()
    assert info.value.contract_names() == [["ContractE", "ContractF"]]
    assert str(info.value) == "contracts: import cycle(s) detected: [[ContractE ContractF]]"


def test_unresolved_import():
    with pytest.raises(ValueError) as info:
        Deployment(build([CONTRACT_H]), None).sort()
    assert str(info.value) == (
        "import from ContractH could not be found: Foo.cdc, make sure import path is "
        "correct, and the contract is added to deployments or has an alias"
    )


def test_aliased_import_is_not_a_dependency():
    sorted_contracts = Deployment(build([CONTRACT_H]), {"Foo.cdc": "0x01"}).sort()
    assert [c.name for c in sorted_contracts] == ["ContractH"]


def test_identifier_import_is_dependency():
    specs = [
        ("Zoo.cdc", b'import "Bar"\npub contract Zoo {}', "0x01"),
        ("Bar.cdc", b"pub contract Bar {}", "0x02"),
    ]
    sorted_contracts = Deployment(build(specs), None).sort()
    assert [c.name for c in sorted_contracts] == ["Bar", "Zoo"]


def test_same_contract_on_multiple_accounts_is_conflict():
    contracts = build([CONTRACT_A, CONTRACT_A])
    with pytest.raises(ValueError, match="the same contract cannot be deployed to multiple accounts"):
        Deployment(contracts, None).sort()


def test_cyclic_import_error_names():
    contracts = build([CONTRACT_A, CONTRACT_B])
    error = CyclicImportError([contracts])
    assert error.contract_names() == [["ContractA", "ContractB"]]
    assert str(error) == "contracts: import cycle(s) detected: [[ContractA ContractB]]"