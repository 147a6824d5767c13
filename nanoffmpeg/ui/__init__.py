"""Styling, theming, framing, help and size checks for the terminal interface."""