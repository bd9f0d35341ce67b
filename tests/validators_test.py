import tempfile
import unittest
from huffcodec.validators import validate_type, validate_range, validate_file_exists

class TestValidators(unittest.TestCase):
    def test_validate_type(self):
        validate_type(b"a", "data", bytes)
        with self.assertRaises(ValueError):
            validate_type("a", "data", bytes)

    def test_validate_range(self):
        validate_range(0, "padding", 0, 7)
        validate_range(7, "padding", 0, 7)
        with self.assertRaises(ValueError):
            validate_range(8, "padding", 0, 7)

    def test_validate_file_exists(self):
        with tempfile.NamedTemporaryFile() as temp_file:
            validate_file_exists(temp_file.name)
        with self.assertRaises(ValueError):
            validate_file_exists(temp_file.name)

if __name__ == '__main__':
    unittest.main()
