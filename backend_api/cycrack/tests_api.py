from django.test import override_settings
from django.urls import reverse
from rest_framework.test import APISimpleTestCase

from cycrack.ciphers import REGISTRY

NEW_YEAR_SEED = 20260101120000


class GameApiTests(APISimpleTestCase):
    def test_health(self):
        resp = self.client.get(reverse('Health'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"message": "Server is up!"})

    def test_start_session(self):
        resp = self.client.post(reverse('start-session'), {}, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["counter"], 0)
        self.assertGreater(data["seed"], 20000101000000)

        resp = self.client.post(reverse('start-session'), {"seed": 42}, format="json")
        self.assertEqual(resp.json(), {"seed": 42, "counter": 0})

    def test_generate_challenge(self):
        resp = self.client.post(
            reverse('challenge'), {"level_id": 2, "seed": NEW_YEAR_SEED, "counter": 1}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["original"], "NPGTY")
        self.assertEqual(data["next_counter"], 2)
        self.assertEqual(data["level_id"], 2)
        cipher = REGISTRY.require(data["cipher_id"])
        self.assertEqual(cipher.decode(data["encrypted"], data["cipher_params"]), "NPGTY")

    def test_generate_endless_challenge(self):
        resp = self.client.post(reverse('challenge'), {"level_id": "endless", "seed": 7}, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["level_id"], "endless")
        self.assertEqual(len(data["original"]), 8)
        self.assertIsNone(data["time_limit"])
        self.assertEqual(data["counter"], 0)

    def test_generate_challenge_unknown_level(self):
        resp = self.client.post(reverse('challenge'), {"level_id": 9, "seed": 1}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("level_id", resp.json())

    @override_settings(CYCRACK={"DETERMINISTIC_CIPHER_CHOICE": True})
    def test_deterministic_cipher_choice(self):
        payload = {"level_id": 4, "seed": NEW_YEAR_SEED, "counter": 3}
        first = self.client.post(reverse('challenge'), payload, format="json").json()
        second = self.client.post(reverse('challenge'), payload, format="json").json()
        self.assertEqual(first, second)

    def test_score(self):
        resp = self.client.post(reverse('score'), {"level_id": 1, "time_elapsed": 0}, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["points"], 225)
        self.assertEqual(data["base_points"], 100)
        self.assertEqual(data["attempt_multiplier"], 1.5)

    def test_score_validation(self):
        resp = self.client.post(
            reverse('score'), {"level_id": 1, "time_elapsed": 0, "hints_used": 4}, format="json"
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post(reverse('score'), {"level_id": 1}, format="json")
        self.assertEqual(resp.status_code, 400)


class MetaApiTests(APISimpleTestCase):
    def test_levels_with_unlock_status(self):
        resp = self.client.get(reverse('levels'), {"highest_cleared": 2})
        self.assertEqual(resp.status_code, 200)
        levels = {entry["id"]: entry for entry in resp.json()}
        self.assertEqual(len(levels), 7)
        self.assertTrue(levels[3]["is_unlocked"])
        self.assertFalse(levels[4]["is_unlocked"])
        self.assertTrue(levels["endless"]["is_unlocked"])
        self.assertEqual(levels[5]["name"], "Master")

    def test_levels_default_to_nothing_cleared(self):
        levels = self.client.get(reverse('levels')).json()
        self.assertEqual([entry["id"] for entry in levels if entry["is_unlocked"]], [1, "endless"])

    def test_levels_bad_query(self):
        resp = self.client.get(reverse('levels'), {"highest_cleared": "abc"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("error", resp.json())

    def test_list_ciphers(self):
        resp = self.client.get(reverse('ciphers'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 28)
        by_id = {entry["id"]: entry for entry in resp.json()}
        self.assertEqual(by_id["xorCipher"]["inverse_scope"], "codes")
        self.assertEqual(by_id["rot13"]["inverse_scope"], "text")
        self.assertIsNone(by_id["caesar"]["inverse_scope"])

        expert = self.client.get(reverse('ciphers'), {"difficulty": "expert"}).json()
        self.assertTrue(expert)
        self.assertTrue(all(entry["difficulty"] == "expert" for entry in expert))

        resp = self.client.get(reverse('ciphers'), {"difficulty": "legendary"})
        self.assertEqual(resp.status_code, 400)

    def test_swagger_schema(self):
        resp = self.client.get(reverse('schema-json'))
        self.assertEqual(resp.status_code, 200)


class CipherApiTests(APISimpleTestCase):
    def test_encode_and_decode(self):
        url = reverse('cipher-encode', kwargs={"cipher_id": "caesar"})
        resp = self.client.post(url, {"text": "CAT", "params": {"shift": 3}}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["output"], "FDW")
        self.assertEqual(resp.json()["params"], {"shift": 3})

        url = reverse('cipher-decode', kwargs={"cipher_id": "vigenere"})
        resp = self.client.post(url, {"text": "RIJVS", "params": {"keyword": "key"}}, format="json")
        self.assertEqual(resp.json()["output"], "HELLO")
        self.assertEqual(resp.json()["params"], {"keyword": "KEY"})

    def test_encode_with_defaults(self):
        url = reverse('cipher-encode', kwargs={"cipher_id": "playfair"})
        resp = self.client.post(url, {"text": "HELLO"}, format="json")
        self.assertEqual(resp.json()["output"], "CFSUPM")

    def test_unknown_cipher(self):
        url = reverse('cipher-encode', kwargs={"cipher_id": "enigma"})
        resp = self.client.post(url, {"text": "CAT"}, format="json")
        self.assertEqual(resp.status_code, 404)
        self.assertIn("error", resp.json())

    def test_invalid_params(self):
        url = reverse('cipher-encode', kwargs={"cipher_id": "affine"})
        resp = self.client.post(url, {"text": "CAT", "params": {"a": 2, "b": 1}}, format="json")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post(url, {"text": "CAT", "params": {"shift": 2}}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_malformed_ciphertext(self):
        url = reverse('cipher-decode', kwargs={"cipher_id": "binary"})
        resp = self.client.post(url, {"text": "not binary"}, format="json")
        self.assertEqual(resp.status_code, 400)

        url = reverse('cipher-decode', kwargs={"cipher_id": "playfair"})
        resp = self.client.post(url, {"text": "CFSUP"}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("odd number of letters", resp.json()["error"])

    def test_worked_example(self):
        url = reverse('cipher-example', kwargs={"cipher_id": "caesar"})
        resp = self.client.post(url, {"letter": "c", "params": {"shift": 3}}, format="json")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["letter"], "C")
        self.assertEqual(data["text"], "C → F")

        resp = self.client.post(url, {"letter": "7"}, format="json")
        self.assertEqual(resp.status_code, 400)

    def test_solver_template(self):
        url = reverse('cipher-solver-template', kwargs={"cipher_id": "vigenere"})
        resp = self.client.post(url, {"ciphertext": "RIJVS", "params": {"keyword": "KEY"}}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertIn('encrypted = "RIJVS"', resp.json()["template"])

        resp = self.client.post(url, {"ciphertext": 'RI"JVS'}, format="json")
        self.assertEqual(resp.status_code, 400)
