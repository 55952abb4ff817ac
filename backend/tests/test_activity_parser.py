import unittest

from adaptfit.services.activity_parser import parse_activity_text, extract_duration


class TestActivityParser(unittest.TestCase):

    def test_wheelchair_cardio(self):
        text = "Did 20 minutes of wheelchair cardio, felt great"
        parsed = parse_activity_text(text)
        self.assertEqual(parsed.exercise_type, "wheelchair mobility")
        self.assertEqual(parsed.duration, 20)
        self.assertEqual(parsed.intensity, "moderate")
        self.assertEqual(parsed.mood, "great")
        self.assertEqual(parsed.notes, text)

    def test_defaults(self):
        parsed = parse_activity_text("Went for a walk")
        self.assertEqual(parsed.exercise_type, "walking")
        self.assertEqual(parsed.duration, 15)
        self.assertEqual(parsed.intensity, "moderate")
        self.assertEqual(parsed.mood, "okay")

        self.assertEqual(parse_activity_text("Something").exercise_type, "general activity")

    def test_hours_and_high_intensity(self):
        parsed = parse_activity_text("Pool session for 1 hour, HARD work, exhausted after")
        self.assertEqual(parsed.exercise_type, "swimming")
        self.assertEqual(parsed.duration, 60)
        self.assertEqual(parsed.intensity, "high")
        self.assertEqual(parsed.mood, "tired")

    def test_first_match_wins(self):
        parsed = parse_activity_text("Gentle yoga that got intense, amazing but tough")
        self.assertEqual(parsed.exercise_type, "stretching")
        self.assertEqual(parsed.intensity, "low")
        self.assertEqual(parsed.mood, "great")

    def test_keywords_match_inside_words(self):
        # "slept" contains "pt"
        self.assertEqual(parse_activity_text("I slept badly").exercise_type, "physical therapy")

    def test_duration(self):
        self.assertEqual(extract_duration("45min"), 45)
        self.assertEqual(extract_duration("2 hours of stretching"), 120)
        self.assertEqual(extract_duration("0 minutes"), 15)
        self.assertEqual(extract_duration("no numbers here"), 15)


if __name__ == '__main__':
    unittest.main()
