import random
from datetime import datetime

from django.test import SimpleTestCase

from cycrack.challenges import (
    ENDLESS,
    ENDLESS_LEVEL,
    Challenge,
    ChallengeGenerator,
    GuessResult,
    Round,
    RoundResult,
    RoundStateError,
    RoundStatus,
    SessionSeed,
    build_challenge,
    calculate_score,
    completion_message,
    generate_challenge_at,
    generate_random_word,
    get_level,
    is_level_unlocked,
    levels_with_status,
    list_levels,
    mulberry32,
    parse_level_id,
    session_seed_from_datetime,
    summarize_level,
)
from cycrack.ciphers import REGISTRY

NEW_YEAR_SEED = 20260101120000


class SeedingTests(SimpleTestCase):
    def test_mulberry32_reference_values(self):
        self.assertEqual(mulberry32(0), 1144304738 / 4294967296)
        self.assertEqual(mulberry32(1), 2693262067 / 4294967296)
        self.assertEqual(mulberry32(42), 2581720956 / 4294967296)

    def test_mulberry32_range(self):
        for seed in (0, 1, 2**31, 2**32 - 1, 2**40 + 7):
            with self.subTest(seed=seed):
                self.assertTrue(0 <= mulberry32(seed) < 1)

    def test_seed_from_datetime(self):
        self.assertEqual(session_seed_from_datetime(datetime(2026, 1, 1, 12, 0, 0)), NEW_YEAR_SEED)
        self.assertEqual(session_seed_from_datetime(datetime(2024, 12, 31, 23, 59, 58)), 20241231235958)

    def test_known_words(self):
        self.assertEqual(generate_random_word(NEW_YEAR_SEED, 0, 5), "PYWAM")
        self.assertEqual(generate_random_word(NEW_YEAR_SEED, 1, 5), "NPGTY")
        self.assertEqual(generate_random_word(12345, 0, 8), "ZNUDQKVK")
        self.assertEqual(generate_random_word(0, 0, 3), "GRW")

    def test_word_is_reproducible(self):
        first = generate_random_word(987654321, 4, 15)
        self.assertEqual(first, generate_random_word(987654321, 4, 15))
        self.assertEqual(len(first), 15)
        self.assertTrue(first.isalpha() and first.isupper())

    def test_shorter_word_is_prefix(self):
        self.assertEqual(generate_random_word(NEW_YEAR_SEED, 0, 3), "PYW")

    def test_session_counter_advances_once_per_word(self):
        session = SessionSeed(NEW_YEAR_SEED)
        self.assertEqual(session.peek_word(5), "PYWAM")
        self.assertEqual(session.counter, 0)
        self.assertEqual(session.next_word(5), "PYWAM")
        self.assertEqual(session.next_word(5), "NPGTY")
        self.assertEqual(session.counter, 2)


class LevelTests(SimpleTestCase):
    def test_parse_level_id(self):
        self.assertEqual(parse_level_id(3), 3)
        self.assertEqual(parse_level_id(" 4 "), 4)
        self.assertEqual(parse_level_id("Endless"), ENDLESS)
        self.assertIsNone(parse_level_id(True))
        self.assertIsNone(parse_level_id("hard"))
        self.assertIsNone(parse_level_id(None))

    def test_get_level(self):
        self.assertEqual(get_level(1).name, "Rookie")
        self.assertEqual(get_level("6").name, "Legendary")
        self.assertIsNone(get_level(7))

    def test_level_constants(self):
        levels = list_levels()
        self.assertEqual([level.word_length for level in levels], [3, 5, 8, 10, 15, 12])
        self.assertEqual([level.base_points for level in levels], [100, 150, 200, 300, 500, 750])
        self.assertEqual([level.unlock_requirement for level in levels], [0, 1, 2, 3, 4, 5])
        for level in levels:
            with self.subTest(level=level.id):
                self.assertEqual(level.challenges_per_level, 5)
                self.assertEqual(len(level.completion_messages), 3)

    def test_every_level_cipher_is_registered(self):
        for level in list_levels(include_endless=True):
            for cipher_id in level.ciphers:
                with self.subTest(level=level.id, cipher=cipher_id):
                    self.assertIn(cipher_id, REGISTRY)

    def test_endless_level(self):
        self.assertEqual(len(ENDLESS_LEVEL.ciphers), 28)
        self.assertTrue(ENDLESS_LEVEL.is_endless)
        self.assertIsNone(ENDLESS_LEVEL.time_limit)
        self.assertEqual(ENDLESS_LEVEL.base_points_for_round(1), 100)
        self.assertEqual(ENDLESS_LEVEL.base_points_for_round(3), 150)
        self.assertEqual(len(list_levels(include_endless=True)), 7)

    def test_unlocking(self):
        self.assertTrue(is_level_unlocked(1, 0))
        self.assertTrue(is_level_unlocked(3, 2))
        self.assertFalse(is_level_unlocked(4, 2))
        self.assertTrue(is_level_unlocked(ENDLESS, 0))
        self.assertFalse(is_level_unlocked(99, 6))

    def test_levels_with_status(self):
        status = {entry["id"]: entry["is_unlocked"] for entry in levels_with_status(2, include_endless=True)}
        self.assertEqual(status, {1: True, 2: True, 3: True, 4: False, 5: False, 6: False, ENDLESS: True})

    def test_completion_message(self):
        self.assertIn(completion_message(1, random.Random(0)), get_level(1).completion_messages)
        self.assertEqual(completion_message(42), "Level Complete!")
        self.assertEqual(completion_message(ENDLESS), "Level Complete!")


class GeneratorTests(SimpleTestCase):
    def setUp(self):
        self.generator = ChallengeGenerator(SessionSeed(NEW_YEAR_SEED), rng=random.Random(1))

    def test_words_follow_the_session_counter(self):
        first = self.generator.generate_challenge(2)
        second = self.generator.generate_challenge(2)
        self.assertEqual(first.original, "PYWAM")
        self.assertEqual(second.original, "NPGTY")
        self.assertEqual((first.counter, second.counter), (0, 1))
        self.assertEqual(self.generator.session.counter, 2)

    def test_challenge_decodes_with_its_own_params(self):
        for level in list_levels(include_endless=True):
            for _ in range(10):
                challenge = self.generator.generate_challenge(level.id)
                cipher = REGISTRY.require(challenge.cipher_id)
                with self.subTest(level=level.id, cipher=cipher.id, params=challenge.cipher_params):
                    self.assertIn(challenge.cipher_id, level.ciphers)
                    self.assertEqual(len(challenge.original), level.word_length)
                    self.assertEqual(cipher.encode(challenge.original, challenge.cipher_params), challenge.encrypted)

    def test_every_generated_challenge_is_solvable_by_decrypting(self):
        for level in list_levels(include_endless=True):
            generator = ChallengeGenerator(SessionSeed(NEW_YEAR_SEED + level.word_length), rng=random.Random(7))
            for _ in range(60):
                challenge = generator.generate_challenge(level.id)
                cipher = REGISTRY.require(challenge.cipher_id)
                decrypted = cipher.decode(challenge.encrypted, challenge.cipher_params)
                game_round = Round(challenge)
                game_round.start()
                with self.subTest(level=level.id, word=challenge.original, cipher=cipher.id, decrypted=decrypted):
                    self.assertTrue(game_round.submit_guess(decrypted).correct)
                    self.assertEqual(game_round.status, RoundStatus.SOLVED)

    def test_challenge_carries_level_and_cipher_metadata(self):
        challenge = self.generator.generate_challenge(3)
        cipher = REGISTRY.require(challenge.cipher_id)
        self.assertEqual(challenge.level_id, 3)
        self.assertEqual(challenge.max_attempts, 4)
        self.assertEqual(challenge.time_limit, 120)
        self.assertEqual(challenge.base_points, 200)
        self.assertEqual(challenge.cipher_name, cipher.name)
        self.assertEqual(challenge.cipher_description, cipher.description)
        self.assertEqual(challenge.as_dict()["encrypted"], challenge.encrypted)

    def test_unknown_level_returns_none(self):
        self.assertIsNone(self.generator.generate_challenge(9))
        self.assertEqual(self.generator.session.counter, 0)

    def test_seeded_rng_replays_the_whole_session(self):
        replay = ChallengeGenerator(SessionSeed(NEW_YEAR_SEED), rng=random.Random(1))
        for level_id in (1, 4, 5, ENDLESS):
            self.assertEqual(self.generator.generate_challenge(level_id), replay.generate_challenge(level_id))

    def test_initialize_session_resets_counter(self):
        self.generator.generate_challenge(1)
        seed = self.generator.initialize_session(datetime(2026, 1, 1, 12, 0, 0))
        self.assertEqual(seed, NEW_YEAR_SEED)
        self.assertEqual(self.generator.session.counter, 0)
        self.assertEqual(self.generator.generate_challenge(2).original, "PYWAM")

    def test_stateless_generation(self):
        challenge = generate_challenge_at(2, NEW_YEAR_SEED, 1)
        self.assertEqual(challenge.original, "NPGTY")
        self.assertEqual(challenge.counter, 1)
        self.assertIsNone(generate_challenge_at("nope", NEW_YEAR_SEED, 0))

    def test_params_are_snapshotted_per_challenge(self):
        level = get_level(2)
        first = build_challenge(level, "HELLO", "caesar", random.Random(3))
        second = build_challenge(level, "HELLO", "caesar", random.Random(4))
        caesar = REGISTRY.require("caesar")
        self.assertEqual(caesar.decode(first.encrypted, first.cipher_params), "HELLO")
        self.assertEqual(caesar.decode(second.encrypted, second.cipher_params), "HELLO")


class RoundTests(SimpleTestCase):
    def setUp(self):
        self.challenge = Challenge(
            original="HELLO",
            encrypted="KHOOR",
            cipher_id="caesar",
            cipher_params={"shift": 3},
            level_id=2,
            max_attempts=4,
        )
        self.round = Round(self.challenge)

    def test_actions_require_start(self):
        self.assertEqual(self.round.status, RoundStatus.GENERATED)
        with self.assertRaises(RoundStateError):
            self.round.use_hint()
        with self.assertRaises(RoundStateError):
            self.round.submit_guess("HELLO")
        self.round.start()
        with self.assertRaises(RoundStateError):
            self.round.start()

    def test_hint_ladder_uses_challenge_params(self):
        self.round.start()
        first = self.round.use_hint()
        self.assertEqual(first.kind, "description")
        self.assertEqual(first.content, REGISTRY.require("caesar").description)
        second = self.round.use_hint()
        self.assertEqual(second.kind, "example")
        self.assertIn("H + 3 → K", second.content)
        third = self.round.use_hint()
        self.assertEqual(third.kind, "solver_template")
        self.assertIn('encrypted = "KHOOR"', third.content)
        self.assertIn("shift = 3", third.content)
        self.assertEqual(self.round.hints_remaining, 0)
        with self.assertRaises(RoundStateError):
            self.round.use_hint()

    def test_guess_feedback(self):
        self.round.start()
        close = self.round.submit_guess("helps")
        self.assertEqual(close.message, "Close! 3 letters match")
        self.assertEqual(close.matching_letters, 3)
        self.assertEqual(self.round.submit_guess("HXXXX").message, "1 letter(s) in correct position")
        self.assertEqual(self.round.submit_guess("ABCDE").message, "No letters in correct position")
        self.assertEqual(self.round.attempts, 3)
        self.assertEqual(self.round.status, RoundStatus.IN_PROGRESS)

    def test_duplicate_and_empty_guesses_do_not_count(self):
        self.round.start()
        self.round.submit_guess("WORLD")
        repeat = self.round.submit_guess(" world ")
        self.assertEqual(repeat, GuessResult("WORLD", False, False, 0, "You already tried that!"))
        self.assertFalse(self.round.submit_guess("   ").accepted)
        self.assertEqual(self.round.attempts, 1)

    def test_solving_and_scoring(self):
        self.round.start()
        self.round.use_hint()
        self.round.submit_guess("WORLD")
        result = self.round.submit_guess(" hello ")
        self.assertTrue(result.correct)
        self.assertEqual(self.round.status, RoundStatus.SOLVED)
        self.assertEqual(self.round.score(10, streak=2), calculate_score(2, 10, 1, 2, 2))
        with self.assertRaises(RoundStateError):
            self.round.submit_guess("HELLO")

    def test_decryption_with_merged_letters_is_accepted(self):
        level = get_level(6)
        for cipher_id, decrypted in (
            ("bifid", "IUMPINGIACKS"),
            ("playfair", "IUMPINGIACKS"),
            ("fourSquare", "IUMPINGIACKS"),
            ("polybius", "IUMPINGIACKS"),
        ):
            challenge = build_challenge(level, "JUMPINGJACKS", cipher_id, random.Random(1))
            cipher = REGISTRY.require(cipher_id)
            with self.subTest(cipher=cipher_id):
                self.assertEqual(cipher.decode(challenge.encrypted, challenge.cipher_params), decrypted)
                game_round = Round(challenge)
                game_round.start()
                self.assertFalse(game_round.submit_guess("IUMP-INGIACKS").correct)
                self.assertTrue(game_round.submit_guess(decrypted.lower()).correct)

    def test_decryption_without_filler_x_is_accepted(self):
        challenge = build_challenge(get_level(3), "WAXBOXXX", "columnar", random.Random(2))
        game_round = Round(challenge)
        game_round.start()
        decrypted = REGISTRY.require("columnar").decode(challenge.encrypted, challenge.cipher_params)
        self.assertTrue(game_round.submit_guess(decrypted).correct)

    def test_give_up(self):
        self.round.start()
        self.assertEqual(self.round.give_up(), "HELLO")
        self.assertEqual(self.round.status, RoundStatus.GAVE_UP)
        self.assertEqual(self.round.score(30), 0)
        with self.assertRaises(RoundStateError):
            self.round.give_up()

    def test_score_requires_finished_round(self):
        self.round.start()
        with self.assertRaises(RoundStateError):
            self.round.score(5)


class LevelSummaryTests(SimpleTestCase):
    def test_partial_run(self):
        summary = summarize_level(
            1,
            [RoundResult(True, 225, 12), RoundResult(False), RoundResult(True, 150, 8)],
        )
        self.assertEqual(summary.total_score, 375)
        self.assertEqual(summary.correct_answers, 2)
        self.assertEqual(summary.accuracy, 40)
        self.assertEqual(summary.fastest_time, 8)
        self.assertFalse(summary.unlocks_next)

    def test_perfect_run_unlocks_next_level(self):
        summary = summarize_level(2, [RoundResult(True, 100, t) for t in (5, 9, 3, 7, 11)])
        self.assertEqual(summary.accuracy, 100)
        self.assertEqual(summary.fastest_time, 3)
        self.assertTrue(summary.unlocks_next)

    def test_nothing_solved(self):
        summary = summarize_level(3, [RoundResult(False), RoundResult(False)])
        self.assertEqual(summary.accuracy, 0)
        self.assertIsNone(summary.fastest_time)
        self.assertEqual(summary.as_dict()["total_score"], 0)

    def test_endless_and_unknown_levels(self):
        summary = summarize_level(ENDLESS, [RoundResult(True, 100, 4), RoundResult(False)])
        self.assertEqual(summary.total_challenges, 2)
        self.assertEqual(summary.accuracy, 50)
        self.assertFalse(summary.unlocks_next)
        self.assertIsNone(summarize_level(0, []))
