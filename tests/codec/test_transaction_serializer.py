"""
Composite serializer tests.

Round trips for every registered type, determinism, fixed-length
enforcement, discriminant layout, union exclusivity and decode validation.
"""

import pytest

from near_client.codec import BinaryDeserializer, BinarySerializer, deserialize, serialize
from near_client.runtime.errors import SchemaError, VariantError
from near_client.transactions import (
    SCHEMA,
    AccessKey,
    AccessKeyPermission,
    Action,
    AddKey,
    CreateAccount,
    DeleteAccount,
    DeleteKey,
    DeployContract,
    FullAccessPermission,
    FunctionCall,
    FunctionCallPermission,
    SignedTransaction,
    Stake,
    Transaction,
    Transfer,
)
from near_client.tx.builders import (
    add_key,
    create_account,
    delete_account,
    delete_key,
    deploy_contract,
    full_access_key,
    function_call,
    function_call_access_key,
    stake,
    transfer,
)
from near_client.types import KeyType, PublicKey, Signature

from helpers import assert_hex_equal


PK = PublicKey(key_type=KeyType.ED25519, data=bytes(range(32)))
PK_HEX = "00" + bytes(range(32)).hex()


def all_actions():
    return [
        create_account(),
        deploy_contract(b"\x00asm\x01\x00\x00\x00"),
        function_call("set_greeting", b'{"msg":"hi"}', 30_000_000_000_000, 10**18),
        transfer(10**24),
        stake(2**100, PK),
        add_key(PK, full_access_key()),
        add_key(PK, function_call_access_key("app.test", ["a", "b"], 250)),
        add_key(PK, function_call_access_key("app.test", [])),
        delete_key(PK),
        delete_account("heir.test"),
    ]


def sample_transaction(actions=None):
    return Transaction(
        signer_id="alice.test",
        public_key=PK,
        nonce=7,
        receiver_id="bob.test",
        block_hash=bytes(range(32, 64)),
        actions=tuple(actions if actions is not None else all_actions()),
    )


ROUND_TRIP_VALUES = [
    PK,
    Signature(key_type=KeyType.ED25519, data=bytes(64)),
    FullAccessPermission(),
    FunctionCallPermission(allowance=None, receiver_id="x", method_names=()),
    FunctionCallPermission(allowance=2**128 - 1, receiver_id="x", method_names=("m",)),
    AccessKeyPermission(full_access=FullAccessPermission()),
    full_access_key(),
    function_call_access_key("app.test", ["go"], 1),
    CreateAccount(),
    DeployContract(code=b""),
    FunctionCall(method_name="f", args=b"\x01", gas=2**64 - 1, deposit=0),
    Transfer(deposit=0),
    Stake(stake=1, public_key=PK),
    AddKey(public_key=PK, access_key=full_access_key()),
    DeleteKey(public_key=PK),
    DeleteAccount(beneficiary_id="b"),
    sample_transaction(),
    sample_transaction(actions=[]),
    SignedTransaction(transaction=sample_transaction(), signature=Signature(data=bytes(range(64)))),
] + all_actions()


class TestRoundTrip:
    """decode(encode(v)) == v for every registered type."""

    @pytest.mark.parametrize("value", ROUND_TRIP_VALUES, ids=lambda v: type(v).__name__)
    def test_round_trip(self, value):
        encoded = serialize(SCHEMA, value)
        decoded = deserialize(SCHEMA, type(value), encoded)
        assert decoded == value
        assert serialize(SCHEMA, decoded) == encoded

    def test_transaction_methods(self):
        tx = sample_transaction()
        assert Transaction.decode(tx.encode()) == tx

    def test_signed_transaction_layout(self):
        """A signed transaction is the transaction followed by key type and 64 bytes."""
        tx = sample_transaction()
        sig = Signature(key_type=KeyType.ED25519, data=bytes(range(64)))
        signed = SignedTransaction(transaction=tx, signature=sig)
        assert signed.encode() == tx.encode() + b"\x00" + bytes(range(64))
        assert SignedTransaction.decode(signed.encode()) == signed

    def test_class_based_api(self):
        value = transfer(5)
        data = BinarySerializer(SCHEMA).serialize(value)
        assert BinaryDeserializer(SCHEMA).deserialize(Action, data) == value


class TestDeterminism:
    """Equal values encode to identical bytes."""

    def test_keyword_order_and_aliases(self):
        a = Transaction(
            signer_id="alice.test", public_key=PK, nonce=1, receiver_id="bob.test",
            block_hash=bytes(32), actions=[transfer(1)],
        )
        b = Transaction(
            actions=(Action(transfer=Transfer(deposit=1)),), blockHash=bytearray(32),
            receiverId="bob.test", nonce=1, publicKey={"keyType": 0, "data": bytes(range(32))},
            signerId="alice.test",
        )
        assert a == b
        assert a.encode() == b.encode()

    def test_encode_twice(self):
        tx = sample_transaction()
        assert tx.encode() == tx.encode()

    def test_function_call_permission_paths(self):
        direct = AccessKey(
            nonce=0,
            permission=AccessKeyPermission(
                function_call=FunctionCallPermission(receiver_id="r", method_names=["x", "y"], allowance=9)
            ),
        )
        built = function_call_access_key("r", ("x", "y"), 9)
        assert serialize(SCHEMA, direct) == serialize(SCHEMA, built)


class TestFixedLength:
    """Fixed-size byte arrays reject any other length."""

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_public_key_length(self, length):
        with pytest.raises(SchemaError, match="expected 32 bytes"):
            serialize(SCHEMA, PublicKey(key_type=KeyType.ED25519, data=bytes(length)))

    @pytest.mark.parametrize("length", [0, 31, 33])
    def test_block_hash_length(self, length):
        tx = Transaction(
            signer_id="a", public_key=PK, nonce=0, receiver_id="b",
            block_hash=bytes(length), actions=[create_account()],
        )
        with pytest.raises(SchemaError, match="block_hash"):
            tx.encode()

    @pytest.mark.parametrize("length", [0, 32, 63, 65])
    def test_signature_length(self, length):
        with pytest.raises(SchemaError, match="expected 64 bytes"):
            serialize(SCHEMA, Signature(key_type=KeyType.ED25519, data=bytes(length)))

    def test_nested_public_key_length(self):
        """The check applies wherever the type is nested."""
        bad = PublicKey(key_type=KeyType.ED25519, data=bytes(16))
        with pytest.raises(SchemaError):
            serialize(SCHEMA, delete_key(bad))


class TestDiscriminants:
    """Tagged union discriminants are the zero-based variant index."""

    def test_transfer_123(self):
        assert_hex_equal(
            serialize(SCHEMA, transfer(123)),
            "03" + "7b000000000000000000000000000000",
            "transfer(123)",
        )

    @pytest.mark.parametrize("action,index", [
        (create_account(), 0),
        (deploy_contract(b""), 1),
        (function_call("m", b"", 0, 0), 2),
        (transfer(0), 3),
        (stake(0, PK), 4),
        (add_key(PK, full_access_key()), 5),
        (delete_key(PK), 6),
        (delete_account("x"), 7),
    ])
    def test_action_indices(self, action, index):
        assert serialize(SCHEMA, action)[0] == index

    def test_create_account_is_single_byte(self):
        assert serialize(SCHEMA, create_account()) == b"\x00"

    def test_access_key_layouts(self):
        assert_hex_equal(serialize(SCHEMA, full_access_key()), "0000000000000000" "01", "full_access_key")
        assert_hex_equal(
            serialize(SCHEMA, function_call_access_key("ab", ["c"])),
            "0000000000000000" "00" "00" "02000000" "6162" "01000000" "01000000" "63",
            "function_call_access_key",
        )

    def test_option_present(self):
        encoded = serialize(SCHEMA, FunctionCallPermission(allowance=1, receiver_id="", method_names=()))
        assert_hex_equal(
            encoded,
            "01" + "01000000000000000000000000000000" + "00000000" + "00000000",
            "allowance=1",
        )

    def test_deploy_contract_code_is_length_prefixed(self):
        assert_hex_equal(serialize(SCHEMA, deploy_contract(b"\xde\xad")), "01" "02000000" "dead", "deploy")


class TestUnionExclusivity:
    """Tagged unions hold exactly one variant."""

    def test_two_variants_rejected_on_construction(self):
        with pytest.raises(VariantError):
            Action(create_account=CreateAccount(), transfer=Transfer(deposit=1))

    def test_no_variant_rejected_on_construction(self):
        with pytest.raises(VariantError):
            Action()

    def test_permission_two_variants(self):
        with pytest.raises(VariantError):
            AccessKeyPermission(
                full_access=FullAccessPermission(),
                function_call=FunctionCallPermission(receiver_id="r"),
            )

    def test_unvalidated_union_rejected_on_encode(self):
        """Values built without validation are still checked by the encoder."""
        bad = Action.model_construct(create_account=CreateAccount(), transfer=Transfer(deposit=1))
        with pytest.raises(VariantError) as exc_info:
            serialize(SCHEMA, bad)
        assert exc_info.value.details["populated"] == ["create_account", "transfer"]

    def test_empty_unvalidated_union_rejected_on_encode(self):
        with pytest.raises(VariantError):
            serialize(SCHEMA, Action.model_construct())

    def test_enum_and_value_accessors(self):
        action = transfer(42)
        assert action.enum == "transfer"
        assert action.value == Transfer(deposit=42)

    @pytest.mark.parametrize("index", [8, 9, 255])
    def test_action_discriminant_out_of_range(self, index):
        with pytest.raises(SchemaError, match="out of range"):
            deserialize(SCHEMA, Action, bytes([index]))

    def test_permission_discriminant_out_of_range(self):
        with pytest.raises(SchemaError):
            deserialize(SCHEMA, AccessKeyPermission, b"\x02")


class TestDecodeValidation:
    """Decoding fails on malformed input instead of producing partial values."""

    def test_every_truncation_fails(self):
        encoded = sample_transaction().encode()
        for cut in range(len(encoded)):
            with pytest.raises(SchemaError):
                Transaction.decode(encoded[:cut])

    def test_trailing_bytes(self):
        with pytest.raises(SchemaError, match="Unexpected 1 bytes"):
            Transaction.decode(sample_transaction().encode() + b"\x00")

    def test_invalid_option_flag(self):
        data = bytes.fromhex("02" "00000000" "00000000")
        with pytest.raises(SchemaError, match="option flag"):
            deserialize(SCHEMA, FunctionCallPermission, data)

    def test_invalid_utf8_in_account_id(self):
        data = bytes.fromhex("07" "02000000" "fffe")
        with pytest.raises(SchemaError, match="UTF-8"):
            deserialize(SCHEMA, Action, data)

    def test_unknown_key_type(self):
        """A key type byte with no known algorithm is rejected."""
        with pytest.raises(SchemaError):
            deserialize(SCHEMA, PublicKey, b"\x05" + bytes(32))

    def test_array_count_larger_than_input(self):
        """A count larger than the data fails on the first missing element."""
        data = bytes.fromhex("00" "00000000" "e8030000" "01000000" "61")
        with pytest.raises(SchemaError, match="Unexpected end of input"):
            deserialize(SCHEMA, FunctionCallPermission, data)
