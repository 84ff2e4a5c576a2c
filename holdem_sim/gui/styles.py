"""QSS stylesheet constants for the Hold'em trainer GUI."""

APP_STYLESHEET = """
QMainWindow {
    background: #f8fafc;
}

#felt {
    background: #166534;
    border-radius: 16px;
}

#felt QGroupBox {
    color: #f9fafb;
    border: 1px solid #15803d;
    background: #14532d;
}

#felt QGroupBox::title {
    color: #f9fafb;
}

#felt QGroupBox:disabled {
    background: #1f3b2a;
}

#felt QLabel {
    color: #f9fafb;
}

#felt #pot {
    font-size: 18px;
    font-weight: bold;
    color: #fde047;
}

#felt #phase {
    font-size: 13px;
    color: #bbf7d0;
}

#felt #chips {
    font-weight: bold;
}

#statusLine {
    font-size: 14px;
    font-weight: bold;
    color: #1f2937;
    background: #f3f4f6;
    border-radius: 8px;
    padding: 6px;
}

QGroupBox {
    font-weight: bold;
    font-size: 12px;
    color: #1f2937;
    border: 1px solid #e5e7eb;
    border-radius: 8px;
    margin-top: 12px;
    padding-top: 14px;
}

QGroupBox::title {
    subcontrol-origin: margin;
    subcontrol-position: top left;
    padding: 0 6px;
    color: #4b5563;
}

QLabel {
    font-size: 12px;
    color: #1f2937;
}

QSpinBox {
    padding: 4px 6px;
    border: 1px solid #d1d5db;
    border-radius: 4px;
    background: white;
    min-width: 80px;
}

QSpinBox:focus {
    border-color: #2563eb;
}

QListWidget {
    border: 1px solid #e5e7eb;
    border-radius: 4px;
    font-size: 12px;
}
"""
