"""Super Decoder: a unique-color Mastermind variant."""
