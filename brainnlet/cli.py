"""Interactive console guide to the neural network explorer."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Sequence

CLEAR_SCREEN = "\033[2J\033[H"

_LOGO = (
    "██████╗ ██████╗  █████╗ ██╗███╗   ██╗███╗   ██╗██╗     ███████╗████████╗\n"
    "██╔══██╗██╔══██╗██╔══██╗██║████╗  ██║████╗  ██║██║     ██╔════╝╚══██╔══╝\n"
    "██████╔╝██████╔╝███████║██║██╔██╗ ██║██╔██╗ ██║██║     █████╗     ██║   \n"
    "██╔══██╗██╔══██╗██╔══██║██║██║╚██╗██║██║╚██╗██║██║     ██╔══╝     ██║   \n"
    "██████╔╝██║  ██║██║  ██║██║██║ ╚████║██║ ╚████║███████╗███████╗   ██║   \n"
    "╚═════╝ ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝╚═╝  ╚═══╝╚═╝  ╚═══╝╚══════╝╚══════╝   ╚═╝   \n"
)

_SECTIONS: dict[int, str] = {
    1: (
        "\n📋 About braiNNlet:\n"
        "════════════════════\n"
        "• Build neural networks layer-by-layer with intuitive controls\n"
        "• Train on real datasets (MNIST handwritten digits)\n"
        "• Visualize training progress with real-time plots\n"
        "• Modern implementation with a graphical explorer\n"
        "• Educational tool for understanding deep learning\n"
        "• Academic project for Programming II coursework\n\n"
    ),
    2: (
        "\n🔧 Technical Features:\n"
        "═══════════════════════\n"
        "• Core: NumPy for matrix operations\n"
        "• GUI: interactive charts and controls\n"
        "• Datasets: MNIST (60,000 samples) with automatic loading\n"
        "• Activations: ReLU, Sigmoid, Tanh, Linear\n"
        "• Loss Functions: CrossEntropy, MSE, BinaryCrossEntropy\n"
        "• Real-time training visualization and metrics\n\n"
    ),
    3: (
        "\n🚀 Getting Started:\n"
        "═══════════════════\n"
        "1. Open the graphical explorer for the full experience\n"
        "2. Click 'Load Dataset' and select MNIST\n"
        "3. Configure network layers (Add/Edit/Remove)\n"
        "4. Set training parameters (epochs, batch size, learning rate)\n"
        "5. Click 'Train Network' and watch real-time progress\n"
        "6. Experiment with different architectures and parameters\n\n"
    ),
    4: (
        "\n💡 Training Tips:\n"
        "═════════════════\n"
        "• Start with 2-3 hidden layers (128, 64 neurons)\n"
        "• Use ReLU activation for hidden layers, Linear for output\n"
        "• Learning rate: 0.01 is a good starting point\n"
        "• Batch size: 32-128 works well for MNIST\n"
        "• Watch the loss curve - it should decrease over time\n"
        "• If loss plateaus, try adjusting learning rate\n"
        "• Validation accuracy shows real performance\n\n"
    ),
    5: (
        "\n🚀 Launching GUI Application...\n"
        "═══════════════════════════════\n"
        "The graphical explorer is distributed separately from this console guide.\n"
        "Start it from your desktop environment once it is installed.\n\n"
    ),
}

_FAREWELL = (
    "🎓 Thank you for exploring braiNNlet!\n"
    "For the full experience, launch the GUI application.\n\n"
)
_INVALID = "❌ Invalid choice. Please enter 0-5.\n\n"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def banner() -> str:
    """Screen-clearing escape followed by the logo and title."""
    return (
        CLEAR_SCREEN
        + "\n"
        + _LOGO
        + "\n🧠 Interactive Neural Network Explorer\n"
        + "======================================\n\n"
    )


def menu() -> str:
    return (
        "Choose an option:\n\n"
        "1️⃣  About braiNNlet\n"
        "2️⃣  Technical Features\n"
        "3️⃣  Getting Started Guide\n"
        "4️⃣  Training Tips\n"
        "5️⃣  Launch GUI Application\n"
        "0️⃣  Exit\n\n"
        "Enter your choice: "
    )


def section(choice: int) -> str:
    """Text shown for menu entries 1 to 5."""
    try:
        return _SECTIONS[choice]
    except KeyError:
        raise ValueError(f"No section for choice {choice}") from None


def _parse_choice(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _read_line() -> str | None:
    line = sys.stdin.readline()
    return line if line else None


def main(argv: Sequence[str] | None = None) -> int:
    """Run the interactive menu until the user chooses 0 or input ends."""
    parser = argparse.ArgumentParser(
        prog="brainnlet", description="Interactive neural network explorer guide."
    )
    parser.parse_args(argv)

    _write(banner())
    while True:
        _write(menu())
        line = _read_line()
        if line is None:
            _write("\n")
            return 0
        choice = _parse_choice(line)
        _write("\n")

        if choice == 0:
            _write(_FAREWELL)
            return 0
        if choice not in _SECTIONS:
            _write(_INVALID)
            continue

        _write(section(choice))
        _write("Press Enter to continue...")
        if _read_line() is None:
            _write("\n")
            return 0
        _write(banner())


if __name__ == "__main__":
    sys.exit(main())