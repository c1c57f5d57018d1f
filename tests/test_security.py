import unittest

from app.config import Settings
from app.core.security import CredentialChecker, StaticKeyChecker, build_credential_checker


class StaticKeyCheckerTest(unittest.TestCase):
    def test_matching_key(self):
        checker = StaticKeyChecker("s3cret")
        self.assertTrue(checker.verify("s3cret"))

    def test_rejects_wrong_or_missing_key(self):
        checker = StaticKeyChecker("s3cret")
        for credential in (None, "", "S3CRET", "s3cret "):
            with self.subTest(credential=credential):
                self.assertFalse(checker.verify(credential))

    def test_unset_token_accepts_nothing(self):
        for token in (None, ""):
            with self.subTest(token=token):
                checker = StaticKeyChecker(token)
                self.assertFalse(checker.verify(""))
                self.assertFalse(checker.verify("anything"))

    def test_built_from_settings(self):
        checker = build_credential_checker(Settings(ADMIN_TOKEN="from-settings"))
        self.assertIsInstance(checker, CredentialChecker)
        self.assertTrue(checker.verify("from-settings"))


if __name__ == "__main__":
    unittest.main()
