from __future__ import annotations
import sys
import customtkinter as ctk
from tkinter import filedialog, messagebox
from PIL import Image
from customtkinter import CTkImage

from typing import Dict, List, Optional
from ..config import AppConfig, DEFAULT_LOGO_MARGIN, DEFAULT_LOGO_SIZE, INITIAL_CONTENT
from ..events import EventBus, LogBridge, setup_logging
from ..domain.styles import CornerDotShape, CornerSquareShape, DotShape, ErrorCorrection, GradientKind
from ..domain.colors import normalize_hex
from ..domain.spec import RenderingConfiguration
from ..domain.contrast import ContrastAssessment
from ..services.renderer import QRCodeRenderer
from ..services.ingest import LogoLoader
from ..session import DesignSession
from ..commands import ApplyPresetCommand, ExportQRCommand, LoadLogoCommand
from ..errors import ExportError

ctk.set_appearance_mode("System")
ctk.set_default_color_theme("blue")

LOW_CONTRAST_TEXT = "The QR code may not be scannable due to low contrast between dots and background."

class _GuiLogger:
    def __init__(self, text: ctk.CTkTextbox) -> None:
        self._t = text
    def write(self, msg: str) -> None:
        self._t.configure(state="normal")
        self._t.insert("end", msg + "\n")
        self._t.see("end")
        self._t.configure(state="disabled")

class _Preview( object ):
    def __init__(self, app: "App"):
        self.app = app
        self.photo: Optional[CTkImage] = None
    def show(self, pil_image: Image.Image) -> None:
        max_side = self.app.cfg.preview_max
        w, h = pil_image.size
        scale = min(max_side / max(w, h), 1.0)
        resized = pil_image.resize((max(1,int(w*scale)), max(1,int(h*scale))), Image.NEAREST)
        self.photo = CTkImage(light_image=resized, dark_image=resized, size=resized.size)
        self.app.preview.configure(image=self.photo, text="")

class App:
    def __init__(self, root: ctk.CTk):
        self.cfg = AppConfig()
        self.root = root
        self.root.title(self.cfg.title)
        self.root.minsize(self.cfg.min_width, self.cfg.min_height)
        self.bus = EventBus()
        self.bus.subscribe(LogBridge().write)
        self.loader = LogoLoader()
        self._pending: List[LoadLogoCommand] = []

        self._build_ui()
        self.preview_out = _Preview(self)
        self.session = DesignSession(renderer=QRCodeRenderer(on_render=self.preview_out.show), bus=self.bus)
        self.session.subscribe(self._on_config)
        self._show_contrast(self.session.contrast)
        self.logger.write("Ready. Edit any field to update the preview.")

        # Shortcuts
        self.root.bind("<Control-s>", lambda e: self.on_export("png"))
        self.root.bind("<Escape>", lambda e: self.on_reset_content())
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    # UI
    def _build_ui(self):
        left = ctk.CTkScrollableFrame(self.root, width=420)
        left.pack(side="left", fill="y", padx=10, pady=10)

        head = ctk.CTkFrame(left)
        head.pack(fill="x", pady=(0, 8))
        ctk.CTkButton(head, text="Apply PrintScribe Branding", command=self.on_preset).pack(side="left", padx=4)

        # Content
        ctk.CTkLabel(left, text="Content").pack(anchor="w")
        self.var_text = ctk.StringVar(value=INITIAL_CONTENT)
        ctk.CTkEntry(left, textvariable=self.var_text, placeholder_text="Enter URL, text, email, phone...")\
            .pack(fill="x", pady=(4, 10))
        self.var_text.trace_add("write", lambda *_: self.session.set_content(self.var_text.get()))

        # Colors
        colors = ctk.CTkFrame(left)
        colors.pack(fill="x", pady=4)
        self.var_fg = self._color_entry(colors, "Dot color", "#000000", 0, lambda c: self.session.set_foreground(c))
        self.var_bg = self._color_entry(colors, "Background", "#FFFFFF", 1, lambda c: self.session.set_background(c))

        self.var_gradient = ctk.BooleanVar(value=False)
        ctk.CTkCheckBox(left, text="Use gradient", variable=self.var_gradient, command=self.on_gradient_toggle)\
            .pack(anchor="w", pady=4)
        self.gradient_frame = ctk.CTkFrame(left)
        self.var_gkind = ctk.StringVar(value=GradientKind.LINEAR.value)
        ctk.CTkLabel(self.gradient_frame, text="Gradient type").grid(row=0, column=0, sticky="w")
        ctk.CTkComboBox(self.gradient_frame, variable=self.var_gkind, values=[k.value for k in GradientKind],
                        state="readonly", command=lambda v: self.session.set_gradient_kind(v))\
            .grid(row=1, column=0, sticky="w", padx=(0, 10))
        self.var_g2 = self._color_entry(self.gradient_frame, "Second color", "#FFD700", 1,
                                        lambda c: self.session.set_gradient_second_color(c))

        self.contrast_label = ctk.CTkLabel(left, text="", text_color="#C0392B", wraplength=380, justify="left")
        self.contrast_label.pack(anchor="w", pady=4)

        # Styles
        styles = ctk.CTkFrame(left)
        styles.pack(fill="x", pady=4)
        self.style_vars: Dict[str, ctk.StringVar] = {}
        self._combo(styles, "Dot style", "dot_shape", DotShape, DotShape.ROUNDED, 0, self.session_call("set_dot_shape"))
        self._combo(styles, "Corner square", "corner_square_shape", CornerSquareShape, CornerSquareShape.EXTRA_ROUNDED, 1,
                    self.session_call("set_corner_square_shape"))
        self._combo(styles, "Corner dot", "corner_dot_shape", CornerDotShape, CornerDotShape.DOT, 2,
                    self.session_call("set_corner_dot_shape"))
        self._combo(styles, "Error correction", "error_correction", ErrorCorrection, ErrorCorrection.M, 3,
                    self.session_call("set_error_correction"))

        # Logo
        logo = ctk.CTkFrame(left)
        logo.pack(fill="x", pady=4)
        ctk.CTkButton(logo, text="Upload logo...", command=self.on_logo_upload).grid(row=0, column=0, padx=4, pady=4)
        ctk.CTkButton(logo, text="Remove logo", command=self.on_logo_remove).grid(row=0, column=1, padx=4, pady=4)
        self.logo_size_label = ctk.CTkLabel(logo, text="Logo size: 40%")
        self.logo_size_label.grid(row=1, column=0, columnspan=2, sticky="w")
        size_slider = ctk.CTkSlider(logo, from_=0.2, to=0.5, number_of_steps=30, command=self.on_logo_size)
        size_slider.set(DEFAULT_LOGO_SIZE)
        size_slider.grid(row=2, column=0, columnspan=2, sticky="ew")
        self.logo_margin_label = ctk.CTkLabel(logo, text="Logo margin: 10px")
        self.logo_margin_label.grid(row=3, column=0, columnspan=2, sticky="w")
        margin_slider = ctk.CTkSlider(logo, from_=0, to=20, number_of_steps=20, command=self.on_logo_margin)
        margin_slider.set(DEFAULT_LOGO_MARGIN)
        margin_slider.grid(row=4, column=0, columnspan=2, sticky="ew")

        # Right: preview, export, console
        right = ctk.CTkFrame(self.root)
        right.pack(side="right", fill="both", expand=True, padx=(0, 10), pady=10)
        ctk.CTkLabel(right, text="Preview").pack(anchor="w")
        self.preview = ctk.CTkLabel(right, text="No preview", fg_color="gray20", corner_radius=6)
        self.preview.pack(fill="both", expand=True, pady=4)

        actions = ctk.CTkFrame(right)
        actions.pack(fill="x", pady=4)
        ctk.CTkButton(actions, text="Download PNG (Ctrl+S)", command=lambda: self.on_export("png")).pack(side="left", padx=4)
        ctk.CTkButton(actions, text="Download SVG", command=lambda: self.on_export("svg")).pack(side="left", padx=4)

        ctk.CTkLabel(right, text="Console").pack(anchor="w")
        self.console = ctk.CTkTextbox(right, height=120)
        self.console.pack(fill="x", pady=4)
        self.logger = _GuiLogger(self.console)
        self.bus.subscribe(self.logger.write)

        self.status = ctk.StringVar(value="Ready")
        ctk.CTkLabel(self.root, textvariable=self.status, anchor="w").pack(fill="x", side="bottom")

    # Helpers
    def session_call(self, name: str):
        return lambda value: getattr(self.session, name)(value)

    def _color_entry(self, parent, label: str, initial: str, column: int, apply) -> ctk.StringVar:
        var = ctk.StringVar(value=initial)
        ctk.CTkLabel(parent, text=label).grid(row=0, column=column, sticky="w", padx=4)
        entry = ctk.CTkEntry(parent, textvariable=var, width=100)
        entry.grid(row=1, column=column, sticky="w", padx=4)
        # commit only complete colors; the entry is the color-input boundary
        entry.bind("<Return>", lambda e: self._commit_color(var, apply))
        entry.bind("<FocusOut>", lambda e: self._commit_color(var, apply))
        return var

    def _commit_color(self, var: ctk.StringVar, apply) -> None:
        value = normalize_hex(var.get())
        if value is None:
            self.bus.publish(f"WARNING ignoring invalid color {var.get()!r}")
            return
        var.set(value)
        apply(value)

    def _combo(self, parent, label: str, field: str, enum_cls, initial, row: int, apply) -> None:
        var = ctk.StringVar(value=initial.value)
        self.style_vars[field] = var
        ctk.CTkLabel(parent, text=label).grid(row=row, column=0, sticky="w", padx=4, pady=2)
        ctk.CTkComboBox(parent, values=[m.value for m in enum_cls], state="readonly", command=apply, variable=var)\
            .grid(row=row, column=1, sticky="w", padx=4, pady=2)

    def _on_config(self, config: RenderingConfiguration, contrast: ContrastAssessment) -> None:
        self._show_contrast(contrast)
        self.status.set(f"Configuration v{self.session.version} - EC {config.error_correction.value}")

    def _show_contrast(self, contrast: ContrastAssessment) -> None:
        if contrast.indeterminate:
            self.contrast_label.configure(text="Contrast could not be checked for the current colors.")
        elif contrast.is_low_contrast:
            self.contrast_label.configure(text=LOW_CONTRAST_TEXT)
        else:
            self.contrast_label.configure(text="")

    # Actions
    def on_gradient_toggle(self):
        enabled = bool(self.var_gradient.get())
        if enabled:
            self.gradient_frame.pack(fill="x", pady=4, after=self.contrast_label)
        else:
            self.gradient_frame.pack_forget()
            self.var_gkind.set(GradientKind.LINEAR.value)
            self.var_g2.set(self.session.colors.default_second_color)
        self.session.set_gradient_enabled(enabled)

    def on_preset(self):
        ApplyPresetCommand(self.session).execute()
        self.var_fg.set(self.session.colors.foreground)
        self.var_bg.set(self.session.colors.background)
        self.var_gradient.set(False)
        self.gradient_frame.pack_forget()
        self.var_gkind.set(self.session.colors.gradient_kind.value)
        self.var_g2.set(self.session.colors.second_color)
        for field, value in self.session.styles.as_values().items():
            self.style_vars[field].set(value)

    def on_logo_upload(self):
        path = filedialog.askopenfilename(
            title="Choose logo",
            filetypes=[("Images", "*.png *.jpg *.jpeg *.gif *.bmp *.webp"), ("All Files", "*.*")],
        )
        if not path:
            return
        cmd = LoadLogoCommand(self.session, self.loader, path, self.bus)
        cmd.execute()
        self._pending.append(cmd)
        self.root.after(self.cfg.poll_ms, self._poll_logo)

    def _poll_logo(self):
        for cmd in [c for c in self._pending if c.done()]:
            self._pending.remove(cmd)
            cmd.finish()
        if self._pending:
            self.root.after(self.cfg.poll_ms, self._poll_logo)

    def on_logo_remove(self):
        self.session.clear_logo()
        self.bus.publish("Logo removed.")

    def on_logo_size(self, value):
        self.logo_size_label.configure(text=f"Logo size: {round(float(value) * 100)}%")
        self.session.set_logo_size(value)

    def on_logo_margin(self, value):
        self.logo_margin_label.configure(text=f"Logo margin: {round(float(value))}px")
        self.session.set_logo_margin(value)

    def on_export(self, fmt: str):
        def _ask_path(filename: str) -> str:
            return filedialog.asksaveasfilename(
                title=f"Save QR code ({fmt.upper()})",
                initialfile=filename,
                defaultextension=f".{fmt}",
                filetypes=[("PNG Image", "*.png")] if fmt == "png" else [("SVG Vector", "*.svg")],
            )
        try:
            path = ExportQRCommand(self.session, fmt, _ask_path, self.bus).execute()
        except ExportError as e:
            messagebox.showwarning("Export failed", str(e))
            return
        if path is not None:
            self.status.set(f"Saved {path.name}")

    def on_reset_content(self):
        self.var_text.set("")
        self.status.set("Content cleared")

    def on_close(self):
        self.loader.shutdown()
        self.root.destroy()

def main():
    setup_logging()
    root = ctk.CTk()
    # Simple scaling tweak for macOS HiDPI
    try:
        if sys.platform == "darwin":
            root.tk.call("tk", "scaling", 1.2)
    except Exception:
        pass
    App(root)
    root.mainloop()
