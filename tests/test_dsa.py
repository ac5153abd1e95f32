#!/usr/bin/env python3

# Copyright (C) 2021-2022 The curvelib developers
#
# This file is part of curvelib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of curvelib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `curvelib.dsa` module."

import json
from hashlib import sha1, sha256

import pytest
from coincurve import PrivateKey  # type: ignore

from curvelib import dsa
from curvelib.alias import INF
from curvelib.ec.curve import Curve, double_mult, mult, secp256k1
from curvelib.ec.number_theory import mod_inv
from curvelib.ec.sec_point import bytes_from_point, point_from_octets
from curvelib.exceptions import CurveLibRuntimeError, CurveLibValueError
from curvelib.hashes import reduce_to_hlen
from tests.ec.test_curve import low_card_curves

MSG = "This message is to be signed"


def test_libsecp256k1() -> None:
    msg = "Satoshi Nakamoto".encode()

    q, Q = dsa.gen_keys(0x1)
    msg_hash = reduce_to_hlen(msg)

    prv_key = PrivateKey.from_int(q)
    assert bytes_from_point(Q) == prv_key.public_key.format()

    # libsecp256k1 signs with the RFC 6979 deterministic nonce:
    # r || s || recovery-id
    c_sig = prv_key.sign_recoverable(msg_hash, hasher=None)
    sig = dsa.Sig.parse(c_sig[:64])
    dsa.assert_as_valid_(msg_hash, Q, sig)
    assert dsa.verify_(msg_hash, Q, sig)
    assert dsa.verify(msg, Q, c_sig[:64])

    # https://bitcointalk.org/index.php?topic=285142.40
    r = 0x934B1EA10A4B3C1757E2B0C017D0B6143CE3C9A7E6A4A49860D7A6AB210EE3D8
    s = 0x2442CE9D2B916064108014783E923EC36B49743E2FFA1C4496F01A512AAFD9E5
    assert sig.r == r
    assert sig.s in (s, sig.ec.n - s)

    sig = dsa.sign_(msg_hash, q)
    assert dsa.verify_(msg_hash, prv_key.public_key.format(compressed=False), sig)


def test_signature() -> None:
    q, Q = dsa.gen_keys(0x1)
    sig = dsa.sign(MSG, q)
    dsa.assert_as_valid(MSG, Q, sig)
    assert dsa.verify(MSG, Q, sig)
    assert dsa.verify(MSG.encode(), bytes_from_point(Q), sig.serialize())
    assert dsa.verify(MSG, bytes_from_point(Q, compressed=False), sig)
    assert sig == dsa.Sig.parse(sig.serialize())
    assert sig == dsa.Sig.parse(sig.serialize().hex())
    assert len(sig.serialize()) == 64

    # malleability: (r, n - s) is valid too
    malleated_sig = dsa.Sig(sig.r, sig.ec.n - sig.s)
    assert dsa.verify(MSG, Q, malleated_sig)

    msg_fake = "This message is not signed"
    assert not dsa.verify(msg_fake, Q, sig)
    err_msg = "signature verification failed"
    with pytest.raises(CurveLibRuntimeError, match=err_msg):
        dsa.assert_as_valid(msg_fake, Q, sig)

    _, Q_fake = dsa.gen_keys()
    assert not dsa.verify(MSG, Q_fake, sig)
    err_msg = "signature verification failed"
    with pytest.raises(CurveLibRuntimeError, match=err_msg):
        dsa.assert_as_valid(MSG, Q_fake, sig)

    assert not dsa.verify(MSG, INF, sig)
    err_msg = "INF public key"
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.assert_as_valid(MSG, INF, sig)

    sig_invalid = dsa.Sig(sig.ec.p, sig.s, check_validity=False)
    assert not dsa.verify(MSG, Q, sig_invalid)
    err_msg = "scalar r not in 1..n-1: "
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.assert_as_valid(MSG, Q, sig_invalid)

    sig_invalid = dsa.Sig(sig.r, sig.ec.p, check_validity=False)
    assert not dsa.verify(MSG, Q, sig_invalid)
    err_msg = "scalar s not in 1..n-1: "
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.assert_as_valid(MSG, Q, sig_invalid)

    sig_invalid = dsa.Sig(0, sig.s, check_validity=False)
    assert not dsa.verify(MSG, Q, sig_invalid)
    with pytest.raises(CurveLibValueError, match="scalar r not in 1..n-1: "):
        sig_invalid.serialize()
    # serialization without validity check
    assert len(sig_invalid.serialize(check_validity=False)) == 64

    err_msg = "private key not in 1..n-1: "
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.sign(MSG, 0)
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.sign(MSG, secp256k1.n)

    # ephemeral key not in 1..n-1
    err_msg = "private key not in 1..n-1: "
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.sign_(reduce_to_hlen(MSG), q, 0)
    with pytest.raises(CurveLibValueError, match=err_msg):
        dsa.sign_(reduce_to_hlen(MSG), q, sig.ec.n)

    # message hash of the wrong size
    with pytest.raises(CurveLibValueError, match="invalid size: "):
        dsa.sign_(reduce_to_hlen(MSG)[:31], q)
    assert not dsa.verify_(reduce_to_hlen(MSG)[:31], Q, sig)


def test_explicit_nonce() -> None:
    q, Q = dsa.gen_keys(0x1)
    msg_hash = reduce_to_hlen(MSG)
    c = dsa.challenge_(msg_hash)

    k = 0x2
    sig = dsa.sign_(msg_hash, q, k)
    K = mult(k)
    assert sig.r == K[0] % secp256k1.n
    assert sig.s == mod_inv(k, secp256k1.n) * (c + sig.r * q) % secp256k1.n
    assert dsa.verify_(msg_hash, Q, sig)

    # the nonce as hex-string or bytes
    assert sig == dsa.sign_(msg_hash, q, "0x02")
    assert sig == dsa.sign_(msg_hash, q, k.to_bytes(32, byteorder="big"))
    assert sig == dsa.sign(MSG, q, k)

    # a random nonce is drawn on each signature
    assert dsa.sign(MSG, q) != dsa.sign(MSG, q)


def test_gen_keys() -> None:
    q, Q = dsa.gen_keys()
    assert 0 < q < secp256k1.n
    assert Q == mult(q)
    assert secp256k1.is_on_curve(Q)

    assert dsa.gen_keys(1) == (1, secp256k1.G)
    assert dsa.gen_keys("0x01") == (1, secp256k1.G)
    assert dsa.gen_keys(secp256k1.n - 1)[1] == secp256k1.negate(secp256k1.G)

    err_msg = "private key not in 1..n-1: "
    for prv_key in (0, secp256k1.n, -1):
        with pytest.raises(CurveLibValueError, match=err_msg):
            dsa.gen_keys(prv_key)

    assert dsa.point_from_key(Q) == Q
    assert dsa.point_from_key(bytes_from_point(Q)) == Q
    assert dsa.point_from_key(bytes_from_point(Q).hex()) == Q
    assert dsa.point_from_key(INF) is INF


def test_challenge() -> None:
    msg_hash = sha256(MSG.encode()).digest()
    c = int.from_bytes(msg_hash, byteorder="big", signed=False)
    assert dsa.challenge_(msg_hash) == c
    assert dsa.challenge_(msg_hash.hex()) == c
    assert dsa.hash_to_int(MSG) == c
    assert dsa.hash_to_int(MSG.encode()) == c

    # the digest is not reduced mod n
    msg_hash = b"\xff" * 32
    assert dsa.challenge_(msg_hash) == 2**256 - 1
    assert dsa.challenge_(msg_hash) > secp256k1.n

    assert dsa.hash_to_int("abc", sha1) == int(sha1(b"abc").hexdigest(), 16)


def test_dict_json() -> None:
    q, Q = dsa.gen_keys()
    sig = dsa.sign(MSG, q)

    sig_dict = sig.to_dict()
    assert sig_dict == {"r": sig.r, "s": sig.s}
    assert dsa.Sig.from_dict(sig_dict) == sig

    sig_json = sig.to_json()
    assert json.loads(sig_json) == sig_dict
    sig2 = dsa.Sig.from_json(sig_json)
    assert sig2 == sig
    assert sig2.ec is secp256k1
    assert dsa.verify(MSG, Q, sig2)

    with pytest.raises(CurveLibValueError, match="scalar s not in 1..n-1: "):
        dsa.Sig.from_dict({"r": sig.r, "s": 0})


def test_gec() -> None:
    """GEC 2: Test Vectors for SEC 1, section 2

    http://read.pudn.com/downloads168/doc/772358/TestVectorsforSEC%201-gec2.pdf
    """
    # 2.1.1 Scheme setup
    # http://www.secg.org/sec2-v2.pdf
    ec = Curve(
        2**160 - 2**31 - 1,
        0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF7FFFFFFC,
        0x1C97BEFC54BD7A8B65ACF89F81D4D4ADC565FA45,
        (
            0x4A96B5688EF573284664698968C38BB913CBFC82,
            0x23A628553168947D59DCC912042351377AC5FB32,
        ),
        0x0100000000000000000001F4C8F927AED3CA752257,
        1,
        name="secp160r1",
    )
    hf = sha1

    # 2.1.2 Key Deployment for U
    dU = 971761939728640320549601132085879836204587084162
    dU, QU = dsa.gen_keys(dU, ec)
    assert format(dU, "x") == "aa374ffc3ce144e6b073307972cb6d57b2a4e982"
    assert QU == (
        466448783855397898016055842232266600516272889280,
        1110706324081757720403272427311003102474457754220,
    )
    assert (
        bytes_from_point(QU, ec).hex() == "0251b4496fecc406ed0e75a24a3c03206251419dc0"
    )

    # 2.1.3 Signing Operation for U
    msg = b"abc"
    k = 702232148019446860144825009548118511996283736794
    sig = dsa.sign_(reduce_to_hlen(msg, hf), dU, k, ec, hf)
    assert sig.r == 0xCE2873E5BE449563391FEB47DDCBA2DC16379191
    assert sig.s == 0x3480EC1371A091A464B31CE47DF0CB8AA2D98B54
    assert sig.ec is ec
    assert sig == dsa.sign(msg, dU, k, ec, hf)

    # 2.1.4 Verifying Operation for V
    dsa.assert_as_valid(msg, QU, sig, hf)
    assert dsa.verify(msg, QU, sig, hf)
    assert sig == dsa.Sig.parse(sig.serialize(), ec)
    assert len(sig.serialize()) == 2 * ec.n_size == 42


def test_low_cardinality() -> None:
    """test low-cardinality curves for all msg/key pairs."""
    # pylint: disable=protected-access

    # ec.n has to be prime to sign
    test_curves = [
        low_card_curves["ec13_11"],
        low_card_curves["ec17_23"],
        low_card_curves["ec19_13"],
        low_card_curves["ec23_19"],
        low_card_curves["ec23_31"],
    ]

    # only low cardinality test curves or it would take forever
    for ec in test_curves:
        for q in range(1, ec.n):  # all possible private keys
            Q = mult(q, ec.G, ec)  # public key
            for k in range(1, ec.n):  # all possible ephemeral keys
                r = mult(k, ec.G, ec)[0] % ec.n
                k_inv = mod_inv(k, ec.n)
                for e in range(ec.n):  # all possible challenges
                    s = k_inv * (e + q * r) % ec.n
                    if r == 0 or s == 0:
                        err_msg = "failed to sign: "
                        with pytest.raises(CurveLibRuntimeError, match=err_msg):
                            dsa._sign_(e, q, k, ec)
                    else:
                        sig = dsa._sign_(e, q, k, ec)
                        assert r == sig.r
                        assert s == sig.s
                        assert sig.ec is ec
                        # valid signature must pass verification
                        dsa._assert_as_valid_(e, Q, r, s, ec)


def test_forge_hash_sig() -> None:
    """forging valid hash signatures"""
    # pylint: disable=protected-access

    ec = secp256k1

    # see https://twitter.com/pwuille/status/1063582706288586752
    # Satoshi's key
    key = "03 11db93e1dcdb8a016b49840f8c53bc1eb68a382e97b1482ecad7b148a6909a5c"
    Q = point_from_octets(key, ec)

    # pick u1 and u2 at will
    for u1, u2 in ((1, 2), (1234567890, 987654321)):
        R = double_mult(u2, Q, u1, ec.G, ec)
        r = R[0] % ec.n
        u2inv = mod_inv(u2, ec.n)
        s = r * u2inv % ec.n
        e = s * u1 % ec.n
        dsa._assert_as_valid_(e, Q, r, s, ec)

        # a valid signature for a hash with unknown preimage
        msg_hash = e.to_bytes(32, byteorder="big", signed=False)
        assert dsa.verify_(msg_hash, Q, dsa.Sig(r, s))
