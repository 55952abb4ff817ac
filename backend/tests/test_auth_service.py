import threading
import unittest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from adaptfit.database import Base
import adaptfit.models
from adaptfit.services.auth_service import (
    AuthError, LocalAuthProvider, LoginThrottle, MockAuthProvider,
    RATE_LIMIT_MESSAGE, UNCONFIRMED_EMAIL_MESSAGE,
    get_auth_provider, mock_user_id, translate_auth_error,
)

# Use an in-memory SQLite DB
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestTranslateAuthError(unittest.TestCase):

    def test_rate_limit(self):
        self.assertEqual(translate_auth_error("over_email_send_rate_limit"), RATE_LIMIT_MESSAGE)
        self.assertEqual(translate_auth_error("Email rate limit exceeded"), RATE_LIMIT_MESSAGE)
        self.assertEqual(translate_auth_error("only request this after 50 seconds"), RATE_LIMIT_MESSAGE)

    def test_unconfirmed_email(self):
        self.assertEqual(translate_auth_error("Email not confirmed"), UNCONFIRMED_EMAIL_MESSAGE)
        self.assertEqual(translate_auth_error("email_not_confirmed"), UNCONFIRMED_EMAIL_MESSAGE)

    def test_other_messages_pass_through(self):
        self.assertEqual(translate_auth_error("Invalid login credentials"), "Invalid login credentials")


class TestMockAuthProvider(unittest.TestCase):

    def setUp(self):
        self.auth = MockAuthProvider()

    def test_user_id_derived_from_email(self):
        self.assertEqual(mock_user_id("a@b.com"), "user_YUBiLmNvbQ")
        self.assertEqual(self.auth.sign_up("a@b.com", "whatever").user_id, "user_YUBiLmNvbQ")

    def test_sign_up_opens_no_session(self):
        self.assertIsNone(self.auth.sign_up("a@b.com", "pw").access_token)

    def test_sign_in_token_resolves(self):
        session = self.auth.sign_in("a@b.com", "pw")
        resolved = self.auth.resolve(session.access_token)
        self.assertEqual(resolved.user_id, session.user_id)
        self.assertEqual(resolved.email, "a@b.com")

    def test_bad_tokens(self):
        self.assertIsNone(self.auth.resolve("not-a-mock-token"))
        self.assertIsNone(self.auth.resolve("mock-token:%%%"))


class TestLocalAuthProvider(unittest.TestCase):

    def setUp(self):
        Base.metadata.create_all(bind=engine)
        self.db = TestingSessionLocal()
        self.clock = FakeClock()
        self.auth = LocalAuthProvider(self.db, "unit-test-secret", LoginThrottle(2, 50, clock=self.clock))

    def tearDown(self):
        self.db.close()
        Base.metadata.drop_all(bind=engine)

    def test_sign_up_and_resolve(self):
        session = self.auth.sign_up("Pat@Example.com", "secret123")
        self.assertEqual(session.email, "pat@example.com")
        self.assertTrue(session.access_token)

        resolved = self.auth.resolve(session.access_token)
        self.assertEqual(resolved.user_id, session.user_id)

    def test_duplicate_email(self):
        self.auth.sign_up("pat@example.com", "secret123")
        with self.assertRaises(AuthError) as ctx:
            self.auth.sign_up("PAT@example.com", "other123")
        self.assertEqual(str(ctx.exception), "User already registered")

    def test_sign_in(self):
        created = self.auth.sign_up("pat@example.com", "secret123")
        session = self.auth.sign_in("PAT@example.com", "secret123")
        self.assertEqual(session.user_id, created.user_id)

        with self.assertRaises(AuthError) as ctx:
            self.auth.sign_in("pat@example.com", "wrong-pass")
        self.assertEqual(str(ctx.exception), "Invalid login credentials")

    def test_token_from_other_secret_rejected(self):
        session = self.auth.sign_up("pat@example.com", "secret123")
        other = LocalAuthProvider(self.db, "another-secret")
        self.assertIsNone(other.resolve(session.access_token))
        self.assertIsNone(self.auth.resolve("garbage"))

    def test_repeated_failures_lock_sign_in(self):
        self.auth.sign_up("pat@example.com", "secret123")
        for _ in range(2):
            with self.assertRaises(AuthError):
                self.auth.sign_in("pat@example.com", "wrong-pass")

        with self.assertRaises(AuthError) as ctx:
            self.auth.sign_in("pat@example.com", "secret123")
        self.assertEqual(translate_auth_error(str(ctx.exception)), RATE_LIMIT_MESSAGE)

        self.clock.now += 51
        self.assertTrue(self.auth.sign_in("pat@example.com", "secret123").access_token)


class TestLoginThrottle(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.throttle = LoginThrottle(3, 50, clock=self.clock)

    def test_lookups_do_not_track_emails(self):
        for i in range(100):
            self.assertFalse(self.throttle.is_locked(f"user{i}@example.com"))
        self.assertEqual(self.throttle.tracked_emails(), 0)

    def test_expired_failures_are_evicted(self):
        for i in range(1000):
            self.throttle.record_failure(f"user{i}@example.com")
        self.assertEqual(self.throttle.tracked_emails(), 1000)

        self.clock.now += 51
        self.throttle.record_failure("late@example.com")
        self.assertEqual(self.throttle.tracked_emails(), 1)

        self.clock.now += 51
        self.assertEqual(self.throttle.tracked_emails(), 0)

    def test_concurrent_failures_all_counted(self):
        throttle = LoginThrottle(400, 50, clock=self.clock)

        def fail_many():
            for _ in range(100):
                throttle.record_failure("pat@example.com")

        threads = [threading.Thread(target=fail_many) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertTrue(throttle.is_locked("pat@example.com"))

    def test_reset_clears_email(self):
        for _ in range(3):
            self.throttle.record_failure("pat@example.com")
        self.assertTrue(self.throttle.is_locked("pat@example.com"))
        self.throttle.reset("pat@example.com")
        self.assertFalse(self.throttle.is_locked("pat@example.com"))
        self.assertEqual(self.throttle.tracked_emails(), 0)


class TestGetAuthProvider(unittest.TestCase):

    def test_selection(self):
        db = TestingSessionLocal()
        try:
            self.assertIsInstance(get_auth_provider(db, "local", "s3cret"), LocalAuthProvider)
            self.assertIsInstance(get_auth_provider(db, "local", None), MockAuthProvider)
            self.assertIsInstance(get_auth_provider(db, "mock", "s3cret"), MockAuthProvider)
        finally:
            db.close()


if __name__ == '__main__':
    unittest.main()
