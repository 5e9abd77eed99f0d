"""
GUI for NeonCalc
Tkinter front end: display, keypad, keyboard bindings and history panel
"""
import logging
import threading
import tkinter as tk
from datetime import datetime
from tkinter import ttk

import config
from calculator import Calculator
from errors import CalculatorError
from local_history import LocalTimestampStore, entry_key

logger = logging.getLogger(__name__)

# (label, value, kind) rows in keypad order
KEYPAD = [
    [("x²", "square", "advanced"), ("√x", "sqrt", "advanced"),
     ("1/x", "reciprocal", "advanced"), ("xʸ", "power", "advanced")],
    [("(", "(", "advanced"), (")", ")", "advanced"),
     ("%", "percent", "advanced"), ("÷", "/", "operator")],
    [("7", "7", "digit"), ("8", "8", "digit"), ("9", "9", "digit"), ("×", "*", "operator")],
    [("4", "4", "digit"), ("5", "5", "digit"), ("6", "6", "digit"), ("−", "-", "operator")],
    [("1", "1", "digit"), ("2", "2", "digit"), ("3", "3", "digit"), ("+", "+", "operator")],
    [("C", "clear", "danger"), ("±", "negate", "normal"), ("0", "0", "digit"), (".", ".", "digit")],
]

# keysym -> calculator button for keys whose char is not the button itself
KEYSYM_BUTTONS = {
    "Return": "=",
    "KP_Enter": "=",
    "BackSpace": "backspace",
    "Escape": "clear",
}

KEY_CHARS = "0123456789.+-*/=()^%"


class NeonCalcGUI:
    def __init__(self, root, service, timestamps=None):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        self.service = service
        self.calculator = Calculator(service)
        self.timestamps = timestamps or LocalTimestampStore()
        self._buttons = []

        self.T = config.get_theme()
        self._apply_ttk_styles()
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)
        self.refresh_display()
        self.refresh_history()

    # ── Theme helpers ──────────────────────────────────────────────────────────
    def _apply_ttk_styles(self):
        """Configure ttk widget styles for the neon palette."""
        T = self.T
        style = ttk.Style()
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure("Treeview", background=T["tree_even"],
                        fieldbackground=T["tree_even"], foreground=T["tree_fg"],
                        rowheight=20, font=config.LABEL_FONT)
        style.configure("Treeview.Heading", background=T["bg_dark"],
                        foreground=T["operator_fg"],
                        font=(config.LABEL_FONT[0], config.LABEL_FONT[1], "bold"))
        style.map("Treeview",
                  background=[("selected", T["equals_bg"])],
                  foreground=[("selected", "#FFFFFF")])

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a flat styled button."""
        T = self.T
        if kind == "equals":
            bg, fg, abg = T["equals_bg"], T["equals_fg"], T["operator_fg"]
        elif kind == "operator":
            bg, fg, abg = T["btn_bg"], T["operator_fg"], T["bg_dark"]
        elif kind == "advanced":
            bg, fg, abg = T["btn_bg"], T["advanced_fg"], T["bg_dark"]
        elif kind == "danger":
            bg, fg, abg = T["danger"], "#FFFFFF", T["bg_dark"]
        else:
            bg, fg, abg = T["btn_bg"], T["btn_fg"], T["bg_dark"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=abg, activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            highlightcolor=T["shadow_lite"],
            **kw
        )

    # ── Layout ─────────────────────────────────────────────────────────────────
    def create_widgets(self):
        T = self.T
        main = tk.Frame(self.root, bg=T["bg"])
        main.pack(fill=tk.BOTH, expand=True, padx=8, pady=8)

        calc_frame = tk.Frame(main, bg=T["bg"])
        calc_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        # Display: expression trail above, result below
        self.display_frame = tk.Frame(calc_frame, bg=T["display_bg"])
        self.display_frame.pack(side=tk.TOP, fill=tk.X, pady=(0, 6))
        self.expression_label = tk.Label(self.display_frame, text="", anchor=tk.E,
                                         font=config.EXPRESSION_FONT,
                                         bg=T["display_bg"], fg=T["expr_fg"])
        self.expression_label.pack(side=tk.TOP, fill=tk.X, padx=12, pady=(8, 0))
        self.display = tk.Label(self.display_frame, text="0", anchor=tk.E,
                                font=config.DISPLAY_FONT,
                                bg=T["display_bg"], fg=T["display_fg"])
        self.display.pack(side=tk.TOP, fill=tk.X, padx=12, pady=(0, 8))

        # Keypad
        keypad = tk.Frame(calc_frame, bg=T["bg"])
        keypad.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        for r, row in enumerate(KEYPAD):
            for c, (label, value, kind) in enumerate(row):
                btn = self._neu_btn(keypad, label, command=lambda v=value: self.on_button(v), kind=kind)
                btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2)
                self._buttons.append(btn)
        last = len(KEYPAD)
        back_btn = self._neu_btn(keypad, "⌫", command=lambda: self.on_button("backspace"))
        back_btn.grid(row=last, column=0, columnspan=2, sticky="nsew", padx=2, pady=2)
        eq_btn = self._neu_btn(keypad, "=", command=lambda: self.on_button("="), kind="equals")
        eq_btn.grid(row=last, column=2, columnspan=2, sticky="nsew", padx=2, pady=2)
        self._buttons.extend([back_btn, eq_btn])
        for r in range(last + 1):
            keypad.rowconfigure(r, weight=1)
        for c in range(4):
            keypad.columnconfigure(c, weight=1)

        # History panel
        history_frame = tk.Frame(main, bg=T["bg_dark"], width=300)
        history_frame.pack(side=tk.RIGHT, fill=tk.BOTH, padx=(8, 0))
        header = tk.Frame(history_frame, bg=T["bg_dark"])
        header.pack(side=tk.TOP, fill=tk.X)
        tk.Label(header, text="HISTORY", font=(config.LABEL_FONT[0], 11, "bold"),
                 bg=T["bg_dark"], fg=T["text"]).pack(side=tk.LEFT, padx=6, pady=(6, 0))
        tk.Label(header, text=f"Last {config.HISTORY_RETENTION_DAYS} days", font=config.LABEL_FONT,
                 bg=T["bg_dark"], fg=T["subtext"]).pack(side=tk.LEFT, padx=6, pady=(6, 0))
        clear_btn = self._neu_btn(header, "Clear", command=self.clear_history, kind="danger",
                                  font=config.LABEL_FONT)
        clear_btn.pack(side=tk.RIGHT, padx=6, pady=(6, 0))
        self._buttons.append(clear_btn)

        cols = ("Time", "Calculation", "Result")
        self.history_tree = ttk.Treeview(history_frame, columns=cols, show="headings", height=12)
        for col, width in zip(cols, (90, 130, 80)):
            self.history_tree.heading(col, text=col)
            self.history_tree.column(col, width=width, anchor=tk.W)
        self.history_tree.tag_configure("odd", background=T["tree_odd"], foreground=T["tree_fg"])
        self.history_tree.tag_configure("even", background=T["tree_even"], foreground=T["tree_fg"])
        self.history_tree.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=4, pady=4)
        self.history_status = tk.Label(history_frame, text="", font=config.LABEL_FONT,
                                       bg=T["bg_dark"], fg=T["subtext"])
        self.history_status.pack(side=tk.BOTTOM, fill=tk.X)

    # ── Display ────────────────────────────────────────────────────────────────
    def refresh_display(self):
        """Redraw the display from the calculator state and live preview"""
        T = self.T
        state = self.calculator.state
        self.expression_label.config(text=state.expression or " ")
        if self.calculator.calculating:
            self.display.config(text="…", fg=T["preview_fg"])
            return
        preview = self.calculator.preview()
        if state.is_error:
            self.display.config(text=state.display, fg=T["error_fg"])
        elif preview is not None:
            self.display.config(text=preview, fg=T["preview_fg"])
        else:
            self.display.config(text=state.display, fg=T["display_fg"])

    def _set_controls_enabled(self, enabled):
        for btn in self._buttons:
            btn.config(state=tk.NORMAL if enabled else tk.DISABLED)

    # ── Input ──────────────────────────────────────────────────────────────────
    def on_button(self, value):
        """Handle calculator button clicks"""
        if value == "=":
            self.start_equals()
            return
        self.calculator.press(value)
        self.refresh_display()

    def on_key_press(self, event):
        """Handle keyboard input"""
        button = KEYSYM_BUTTONS.get(event.keysym)
        if button is None and event.char and event.char in KEY_CHARS:
            button = event.char
        if button is not None:
            self.on_button(button)

    def start_equals(self):
        """Confirm the current calculation; service calls run off the Tk thread"""
        pending = self.calculator.begin_equals()
        if pending is None:
            self.refresh_display()
            return

        self._set_controls_enabled(False)
        self.refresh_display()

        def worker():
            try:
                response = self.calculator.call_service(pending)
            except Exception as e:
                self.root.after(0, lambda err=e: self._finish_equals(pending, error=err))
            else:
                self.root.after(0, lambda: self._finish_equals(pending, response=response))

        threading.Thread(target=worker, daemon=True).start()

    def _finish_equals(self, pending, response=None, error=None):
        self.calculator.finish_equals(pending, response=response, error=error)
        self._set_controls_enabled(True)
        self.refresh_display()
        self.refresh_history()

    # ── History ────────────────────────────────────────────────────────────────
    def refresh_history(self):
        """Reload the history list and stamp new entries with local times"""
        for item in self.history_tree.get_children():
            self.history_tree.delete(item)
        try:
            history = self.service.get_history(config.HISTORY_RETENTION_DAYS)
        except CalculatorError as e:
            logger.warning("History unavailable: %s", e)
            self.history_status.config(text="History syncs when online")
            return

        stamps = self.timestamps.record_all(history)
        self.history_status.config(text="" if history else "No calculations yet")
        for i, (expr, result) in enumerate(history):
            ts = stamps.get(entry_key(expr, result))
            when = datetime.fromtimestamp(ts).strftime("%b %d %H:%M") if ts else ""
            tag = "even" if i % 2 == 0 else "odd"
            self.history_tree.insert("", tk.END, values=(when, expr, f"= {result}"), tags=(tag,))

    def clear_history(self):
        try:
            self.service.clear_history()
        except CalculatorError as e:
            logger.warning("Could not clear history: %s", e)
        else:
            self.timestamps.clear()
        self.refresh_history()
