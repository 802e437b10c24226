"""
goup.forms.definitions

Step layout of the club and event creation wizards.
"""

from __future__ import annotations

from goup.forms.schemas import (
    CAPACITY_BRACKETS,
    DRESS_CODES,
    EVENT_TYPES,
    GENRES,
    LINEUP_SLOTS,
    MIN_AGES,
    VIP_OPTIONS,
    YES_NO,
    ClubForm,
    EventForm,
)
from goup.forms.wizard import Step, StepField, Wizard

CLUB_WIZARD: Wizard[ClubForm] = Wizard(
    name="club",
    schema=ClubForm,
    steps=[
        Step(
            icon="🏷️",
            title="Identidad & contacto",
            fields=(
                StepField("nombre", "Nombre del club *"),
                StepField("descripcion", "Descripción *", kind="textarea"),
                StepField("direccion", "Dirección *", kind="address"),
                StepField("latitud", "Latitud", kind="hidden"),
                StepField("longitud", "Longitud", kind="hidden"),
                StepField("ciudad", "Ciudad *"),
                StepField("pais", "País *"),
                StepField("telefono", "Teléfono"),
                StepField("email", "Email", kind="email"),
                StepField("sitio_web", "Sitio web"),
                StepField("instagram", "Instagram"),
            ),
        ),
        Step(
            icon="🖼️",
            title="Medios",
            fields=(
                StepField("imagen", "Imagen principal", kind="file"),
                StepField("banner", "Banner", kind="file"),
            ),
        ),
        Step(
            icon="🧩",
            title="Servicios & capacidades",
            fields=(
                StepField("accesibilidad", "Accesibilidad", kind="select", options=YES_NO),
                StepField("estacionamientos", "Estacionamientos", kind="select", options=YES_NO),
                StepField("guardaropia", "Guardarropía", kind="select", options=YES_NO),
                StepField("terraza", "Terraza", kind="select", options=YES_NO),
                StepField("fumadores", "Zona de fumadores", kind="select", options=YES_NO),
                StepField("wifi", "Wi-Fi", kind="select", options=YES_NO),
                StepField("ambientes", "Ambientes", kind="number"),
                StepField("banos", "Baños", kind="number"),
            ),
        ),
    ],
)

EVENT_WIZARD: Wizard[EventForm] = Wizard(
    name="event",
    schema=EventForm,
    steps=[
        Step(
            icon="🎵",
            title="Información del Evento",
            fields=(
                StepField("nombre", "Nombre del Evento *"),
                StepField("tipo", "Tipo de Evento *", kind="select", options=EVENT_TYPES),
            ),
        ),
        Step(
            icon="🕒",
            title="Fecha & Horario",
            fields=(
                StepField("fecha", "Fecha *", kind="date"),
                StepField("horaInicio", "Inicio *", kind="time"),
                StepField("horaCierre", "Cierre *", kind="time"),
            ),
        ),
        Step(
            icon="👥",
            title="Capacidad",
            fields=(
                StepField(
                    "capacidad", "Capacidad esperada *", kind="select", options=CAPACITY_BRACKETS
                ),
            ),
        ),
        Step(
            icon="📞",
            title="Contacto organizador",
            fields=(
                StepField("promotor", "Promotor *"),
                StepField("telefono", "Teléfono *"),
                StepField("email", "Email *", kind="email"),
            ),
        ),
        Step(
            icon="✨",
            title="Concepto & Experiencia",
            fields=(
                StepField("desc", "Descripción *", kind="textarea"),
                StepField("generos", "Géneros musicales *", kind="checkbox_group", options=GENRES),
                StepField("generosOtro", "¿Cuál otro género?", show_when=("generos", "Otros")),
            ),
        ),
        Step(
            icon="🧾",
            title="Políticas del evento",
            fields=(
                StepField("edad", "Edad mínima *", kind="select", options=MIN_AGES),
                StepField("dress_code", "Dress code *", kind="select", options=DRESS_CODES),
                StepField("tieneVip", "¿Zonas VIP?", kind="select", options=VIP_OPTIONS),
                StepField("reservas", "¿Acepta reservas?", kind="select", options=YES_NO),
                StepField("tieneLineup", "¿Tendrá Lineup?", kind="select", options=YES_NO),
                StepField(
                    "djs",
                    "DJs",
                    show_when=("tieneLineup", "Sí"),
                    repeat=LINEUP_SLOTS,
                ),
            ),
        ),
        Step(
            icon="🛡️",
            title="Flyer & Seguridad",
            fields=(
                StepField("flyer", "Flyer del evento", kind="file"),
                StepField("imgSec", "Imagen secundaria", kind="file"),
            ),
        ),
        Step(icon="✅", title="Revisión"),
    ],
)

WIZARDS = {w.name: w for w in (CLUB_WIZARD, EVENT_WIZARD)}
