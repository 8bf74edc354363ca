import random

from django.test import SimpleTestCase

from cycrack.ciphers import (
    AFFINE_VALID_A,
    REGISTRY,
    CipherError,
    CipherRegistry,
    InvalidParameterError,
    UnknownCipherError,
    get_cipher,
    mod_inverse,
)
from cycrack.ciphers.encodings import XorCipher
from cycrack.ciphers.grids import PlayfairCipher

# Words every registered cipher must round-trip. None contain J (folded into I
# by the grid ciphers) and none end in X (stripped as padding).
ROUND_TRIP_WORDS = [
    "A",
    "CAT",
    "HELLO",
    "CIPHER",
    "ATTACK",
    "BALLOON",
    "RHYTHM",
    "QUIZ",
    "CRYPTOGRAPHYISPUZZLE",
]


class KnownCiphertextTests(SimpleTestCase):
    def assertEncodes(self, cipher_id, plaintext, expected, params=None):
        cipher = REGISTRY.require(cipher_id)
        self.assertEqual(cipher.encode(plaintext, params), expected)
        self.assertEqual(cipher.decode(expected, params), plaintext.upper())

    def test_caesar_shift_three(self):
        self.assertEncodes("caesar", "CAT", "FDW", {"shift": 3})

    def test_atbash(self):
        self.assertEncodes("atbash", "HELLO", "SVOOL")

    def test_rail_fence_textbook_example(self):
        self.assertEncodes(
            "railFence", "WEAREDISCOVEREDFLEEATONCE", "WECRLTEERDSOEEFEAOCAIVDEN", {"rails": 3}
        )

    def test_vigenere_key(self):
        self.assertEncodes("vigenere", "HELLO", "RIJVS", {"keyword": "KEY"})

    def test_playfair_monarchy(self):
        self.assertEncodes("playfair", "HELLO", "CFSUPM", {"keyword": "MONARCHY"})

    def test_affine_defaults(self):
        self.assertEncodes("affine", "HELLO", "RCLLA", {"a": 5, "b": 8})

    def test_beaufort(self):
        self.assertEncodes("beaufort", "HELLO", "DANZQ", {"keyword": "KEY"})

    def test_keyword_alphabet(self):
        self.assertEncodes("keyword", "HELLO", "DTIIL", {"keyword": "SECRET"})

    def test_substitution_default_key(self):
        self.assertEncodes("substitution", "HELLO", "ITSSG")

    def test_columnar_pads_with_x(self):
        self.assertEncodes("columnar", "HELLO", "EOHLLX", {"keyword": "KEY"})

    def test_simple_encodings(self):
        self.assertEncodes("rot13", "HELLO", "URYYB")
        self.assertEncodes("simpleShift", "CAT", "DBU")
        self.assertEncodes("reversed", "HELLO", "OLLEH")
        self.assertEncodes("a1z26", "CAT", "3-1-20")
        self.assertEncodes("morse", "SOS", "... --- ...")
        self.assertEncodes("binary", "A", "01000001")
        self.assertEncodes("hex", "HI", "48 49")
        self.assertEncodes("base64ish", "HELLO", "SEVMTE8")
        self.assertEncodes("polybius", "HI", "23 24")
        self.assertEncodes("pigLatin", "HELLO", "ELLO-HAY")
        self.assertEncodes("pigLatin", "EGG", "EGG-YAY")

    def test_xor_renders_hex(self):
        self.assertEncodes("xorCipher", "A", "6B", {"key": 42})

    def test_compounds_chain_their_parts(self):
        self.assertEncodes("doubleCaesar", "CAT", "MKD", {"shift1": 3, "shift2": 7})
        self.assertEncodes("reverseCaesar", "CAT", "YFH", {"shift": 5})
        self.assertEncodes("atbashVigenere", "CAT", "JZY", {"keyword": "MASTER"})

    def test_rot5_rotates_digits(self):
        cipher = REGISTRY.require("rot5")
        self.assertEqual(cipher.encode("A3"), "F8")
        self.assertEqual(cipher.decode("F8"), "A3")

    def test_non_letters_pass_through_shift_ciphers(self):
        self.assertEqual(REGISTRY.require("caesar").encode("Hi, there!", {"shift": 1}), "Ij, uifsf!")


class RoundTripTests(SimpleTestCase):
    def test_every_cipher_round_trips_with_defaults(self):
        for cipher in REGISTRY:
            for word in ROUND_TRIP_WORDS:
                with self.subTest(cipher=cipher.id, word=word):
                    self.assertEqual(cipher.decode(cipher.encode(word)), word)

    def test_every_cipher_round_trips_with_random_params(self):
        rng = random.Random(2026)
        for cipher in REGISTRY:
            for _ in range(5):
                params = cipher.randomize_params(rng)
                for word in ROUND_TRIP_WORDS:
                    with self.subTest(cipher=cipher.id, params=params, word=word):
                        self.assertEqual(cipher.decode(cipher.encode(word, params), params), word)

    def test_lowercase_input_decodes_to_uppercase(self):
        for cipher_id in ("caesar", "vigenere", "playfair", "morse", "bifid"):
            cipher = REGISTRY.require(cipher_id)
            with self.subTest(cipher=cipher_id):
                self.assertEqual(cipher.decode(cipher.encode("hello").upper()), "HELLO")

    def test_decryption_re_encrypts_to_the_same_ciphertext(self):
        # Words with J or filler-looking X do not always decode verbatim.
        rng = random.Random(99)
        for cipher in REGISTRY:
            for word in ("JUMPINGJACKS", "BOX", "JAZZ", "TAXX", "AXA", "XX"):
                params = cipher.randomize_params(rng)
                encrypted = cipher.encode(word, params)
                with self.subTest(cipher=cipher.id, params=params, word=word):
                    self.assertEqual(cipher.encode(cipher.decode(encrypted, params), params), encrypted)

    def test_columnar_only_strips_padding(self):
        columnar = REGISTRY.require("columnar")
        encrypted = columnar.encode("ABXX", {"keyword": "KEY"})
        self.assertEqual(len(encrypted), 6)
        self.assertEqual(columnar.decode(encrypted, {"keyword": "KEY"}), "ABXX")

    def test_playfair_splits_doubled_letters(self):
        pairs = PlayfairCipher.digraphs("BALLOON")
        self.assertEqual(pairs, [("B", "A"), ("L", "X"), ("L", "O"), ("O", "N")])


class SelfInverseTests(SimpleTestCase):
    def test_reciprocal_ciphers(self):
        rng = random.Random(5)
        for cipher_id in ("rot13", "atbash", "beaufort"):
            cipher = REGISTRY.require(cipher_id)
            self.assertTrue(cipher.self_inverse)
            params = cipher.randomize_params(rng)
            for word in ROUND_TRIP_WORDS:
                with self.subTest(cipher=cipher_id, word=word):
                    self.assertEqual(cipher.encode(cipher.encode(word, params), params), word)

    def test_xor_is_self_inverse_on_codes(self):
        codes = [ord(ch) for ch in "HELLO"]
        for key in (1, 42, 127):
            with self.subTest(key=key):
                self.assertEqual(XorCipher.xor_codes(XorCipher.xor_codes(codes, key), key), codes)

    def test_only_reciprocal_ciphers_are_flagged(self):
        flagged = {cipher.id for cipher in REGISTRY if cipher.self_inverse}
        self.assertEqual(flagged, {"rot13", "atbash", "beaufort", "xorCipher"})
        on_text = {cipher.id for cipher in REGISTRY if cipher.describe()["inverse_scope"] == "text"}
        self.assertEqual(on_text, {"rot13", "atbash", "beaufort"})

    def test_xor_metadata_limits_inversion_to_codes(self):
        xor = REGISTRY.require("xorCipher")
        self.assertEqual(xor.describe()["inverse_scope"], "codes")
        self.assertNotEqual(xor.encode(xor.encode("HELLO")), "HELLO")
        self.assertIsNone(REGISTRY.require("caesar").describe()["inverse_scope"])


class ParameterTests(SimpleTestCase):
    def test_mod_inverse_for_every_unit(self):
        for a in AFFINE_VALID_A:
            with self.subTest(a=a):
                self.assertEqual((a * mod_inverse(a)) % 26, 1)

    def test_mod_inverse_rejects_non_units(self):
        with self.assertRaises(InvalidParameterError):
            mod_inverse(13)

    def test_affine_rejects_even_a(self):
        with self.assertRaises(InvalidParameterError):
            REGISTRY.require("affine").encode("HELLO", {"a": 2, "b": 1})

    def test_unknown_parameter_is_rejected(self):
        with self.assertRaises(InvalidParameterError):
            REGISTRY.require("caesar").encode("CAT", {"rails": 3})

    def test_keyword_must_be_alphabetic(self):
        with self.assertRaises(InvalidParameterError):
            REGISTRY.require("vigenere").encode("CAT", {"keyword": "K3Y"})

    def test_substitution_key_must_be_permutation(self):
        with self.assertRaises(InvalidParameterError):
            REGISTRY.require("substitution").encode("CAT", {"key": "ABC"})

    def test_randomized_params_are_fresh_and_valid(self):
        rng = random.Random(11)
        for cipher in REGISTRY:
            params = cipher.randomize_params(rng)
            with self.subTest(cipher=cipher.id):
                self.assertEqual(set(params), set(cipher.defaults))
                self.assertEqual(cipher.resolve_params(params), params)

    def test_randomizing_does_not_touch_defaults(self):
        caesar = REGISTRY.require("caesar")
        caesar.randomize_params(random.Random(3))
        self.assertEqual(caesar.defaults, {"shift": 3})
        self.assertEqual(caesar.encode("CAT"), "FDW")

    def test_malformed_ciphertext_raises_cipher_error(self):
        for cipher_id, text in (
            ("binary", "0102"),
            ("hex", "ZZ"),
            ("base64ish", "!!!"),
            ("playfair", "CFSUP"),
            ("fourSquare", "FQNIB"),
        ):
            with self.subTest(cipher=cipher_id):
                with self.assertRaises(CipherError):
                    REGISTRY.require(cipher_id).decode(text)


class RegistryTests(SimpleTestCase):
    def test_catalog_size_and_order(self):
        self.assertEqual(len(REGISTRY), 28)
        self.assertEqual(REGISTRY.ids()[0], "reversed")
        self.assertEqual(REGISTRY.ids()[-1], "base64ish")

    def test_unknown_cipher(self):
        self.assertIsNone(get_cipher("enigma"))
        self.assertNotIn("enigma", REGISTRY)
        with self.assertRaises(UnknownCipherError):
            REGISTRY.require("enigma")
        with self.assertRaises(KeyError):
            REGISTRY.require("enigma")

    def test_by_difficulty(self):
        expert = {cipher.id for cipher in REGISTRY.by_difficulty("expert")}
        self.assertEqual(expert, {"adfgx", "bifid", "fourSquare", "xorCipher", "base64ish"})

    def test_duplicate_ids_rejected(self):
        caesar = REGISTRY.require("caesar")
        with self.assertRaises(ValueError):
            CipherRegistry([caesar, caesar])

    def test_compounds_share_registry_instances(self):
        self.assertIs(REGISTRY.require("doubleCaesar").caesar, REGISTRY.require("caesar"))
        self.assertIs(REGISTRY.require("atbashVigenere").vigenere, REGISTRY.require("vigenere"))

    def test_describe(self):
        info = REGISTRY.require("xorCipher").describe()
        self.assertEqual(info["id"], "xorCipher")
        self.assertEqual(info["difficulty"], "expert")
        self.assertEqual(info["defaults"], {"key": 42})


class TeachingAidTests(SimpleTestCase):
    def test_worked_example_uses_given_params(self):
        example = REGISTRY.get_worked_example("caesar", "c", {"shift": 3})
        self.assertEqual(example.text, "C → F")
        self.assertIn("C + 3 → F", example.visual)

    def test_worked_example_falls_back_to_a(self):
        example = REGISTRY.get_worked_example("atbash", "7")
        self.assertTrue(example.text.startswith("A → Z"))

    def test_worked_example_for_every_cipher(self):
        for cipher in REGISTRY:
            with self.subTest(cipher=cipher.id):
                example = cipher.worked_example("H")
                self.assertTrue(example.visual)
                self.assertTrue(example.text)

    def test_unknown_cipher_teaching_aids(self):
        self.assertIsNone(REGISTRY.get_worked_example("enigma", "A"))
        self.assertIsNone(REGISTRY.get_guided_solver_template("enigma", "XYZ"))

    def test_solver_template_embeds_ciphertext_and_key(self):
        template = REGISTRY.get_guided_solver_template("caesar", "FDW", {"shift": 3})
        self.assertIn('encrypted = "FDW"', template)
        self.assertIn("shift = 3", template)
        self.assertIn("TODO", template)

    def test_affine_template_includes_inverse(self):
        template = REGISTRY.get_guided_solver_template("affine", "RCLLA", {"a": 5, "b": 8})
        self.assertIn("a_inv = 21", template)

    def test_solver_template_for_every_cipher(self):
        for cipher in REGISTRY:
            with self.subTest(cipher=cipher.id):
                encrypted = cipher.encode("HELLO")
                template = cipher.solver_template(encrypted)
                self.assertIn(encrypted, template)
                self.assertNotIn("$", template)

    def test_hints_reveal_the_key(self):
        self.assertEqual(REGISTRY.require("caesar").hint({"shift": 11}), "Shift value: 11")
        self.assertIn("MASTER", REGISTRY.require("atbashVigenere").hint())
        self.assertEqual(REGISTRY.require("xorCipher").hint({"key": 7}), "XOR key: 7")
