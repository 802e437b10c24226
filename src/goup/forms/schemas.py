"""
goup.forms.schemas

Pydantic models for every form the web client submits.

Responsibilities:
- Generic submission payloads (club / producer / event) for `POST /api/submit`.
- Wizard forms (club creation, event creation) and their edit counterparts.
- Single-page forms: role request, profile, producer.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from goup.forms import fields as f

Text = Annotated[str | None, f.optional_text()]
YesNo = Annotated[bool | str, f.yes_no_value()]
Flag = Annotated[bool | str, f.loose_flag()]
Strings = Annotated[list[str], f.string_list()]


class _Form(BaseModel):
    # Uploaded files travel separately (multipart); unknown keys such as UI-only
    # toggles are ignored.
    model_config = ConfigDict(extra="ignore", validate_default=True)


# ---------- generic submission payloads -------------------------------------


class ClubServices(_Form):
    estacionamiento: bool | None = None
    guardarropia: bool | None = None
    terraza: bool | None = None
    accesibilidad: bool | None = None
    wifi: bool | None = None
    fumadores: bool | None = None


class ClubSubmission(_Form):
    nombre: Annotated[str, f.min_text(2, "Ingresa el nombre del club")] = ""
    email: Annotated[str | None, f.email("Email inválido", allow_empty=True)] = None
    tel: Text = None
    desc: Text = None
    direccion: Text = None
    comuna: Text = None
    aforo: Annotated[int, f.coerced_int("Aforo inválido", minimum=1)] = 0
    banos: Annotated[int | None, f.coerced_int("Número inválido", minimum=0, optional=True)] = None
    amb: Annotated[int | None, f.coerced_int("Número inválido", minimum=0, optional=True)] = None
    servicios: ClubServices
    img_perfil: Text = None
    img_banner: Text = None


class ProducerSubmission(_Form):
    nombre: Annotated[str, f.min_text(2, "Ingresa el nombre de la productora")] = ""
    correo: Annotated[str, f.email("Email inválido")] = ""
    tel: Text = None
    img_perfil_prod: Text = None
    img_banner_prod: Text = None
    rut: Text = None
    rs: Text = None


class EventSubmission(_Form):
    nombre: Annotated[str, f.min_text(2, "Ingresa el nombre del evento")] = ""
    tipo: Annotated[str, f.min_text(1, "Selecciona el tipo")] = ""
    fecha: Annotated[str, f.min_text(1, "Requerido")] = ""
    inicio: Annotated[str, f.min_text(1, "Requerido")] = ""
    fin: Annotated[str, f.min_text(1, "Requerido")] = ""
    edad: Annotated[int, f.coerced_int("Edad inválida", minimum=1)] = 0
    capacidad: Annotated[str, f.min_text(1, "Selecciona capacidad")] = ""
    presupuesto: Text = None
    promotor: Annotated[str, f.min_text(2, "Ingresa el nombre del promotor")] = ""
    telefono: Annotated[str, f.min_text(5, "Teléfono inválido")] = ""
    email: Annotated[str, f.email("Email inválido")] = ""
    desc: Text = None
    generos: Strings = Field(default_factory=list)
    flyer: Text = None
    img_sec: Text = None


SubmissionType = Literal["club", "producer", "event"]

SUBMISSION_SCHEMAS: dict[str, type[_Form]] = {
    "club": ClubSubmission,
    "producer": ProducerSubmission,
    "event": EventSubmission,
}


# ---------- club wizard -----------------------------------------------------


class ClubForm(_Form):
    nombre: Annotated[str, f.min_text(1, "El nombre es obligatorio")] = ""
    descripcion: Annotated[str, f.min_text(1, "La descripción es obligatoria")] = ""
    direccion: Annotated[str, f.min_text(1, "La dirección es obligatoria")] = ""
    ciudad: Annotated[str, f.min_text(1, "La ciudad es obligatoria")] = ""
    pais: Annotated[str, f.min_text(1, "El país es obligatorio")] = ""
    latitud: Annotated[float | None, f.optional_float()] = None
    longitud: Annotated[float | None, f.optional_float()] = None
    telefono: Text = ""
    email: Annotated[str | None, f.email("Email inválido", allow_empty=True)] = ""
    sitio_web: Annotated[str | None, f.url_or_empty("URL inválida")] = ""
    instagram: Text = ""
    accesibilidad: YesNo = "No"
    estacionamientos: YesNo = "No"
    guardaropia: YesNo = "No"
    terraza: YesNo = "No"
    fumadores: YesNo = "No"
    wifi: YesNo = "No"
    ambientes: Annotated[int | None, f.coerced_int("Número inválido", minimum=0, optional=True)] = None
    banos: Annotated[int | None, f.coerced_int("Número inválido", minimum=0, optional=True)] = None


class ClubEditForm(ClubForm):
    # The admin edit form only insists on the name.
    descripcion: Text = ""
    direccion: Text = ""
    ciudad: Text = ""
    pais: Text = ""


# ---------- event wizard ----------------------------------------------------

EVENT_TYPES = ("Club", "Festival", "After", "Privado", "Open Air", "Bar")
CAPACITY_BRACKETS = ("0 a 200", "201 a 500", "501 a 1000", "Más de 1000")
GENRES = (
    "Reguetón",
    "Techno",
    "House",
    "Pop",
    "Salsa",
    "Hardstyle",
    "Trance",
    "Hip-Hop",
    "Urbano",
    "Guaracha",
    "Otros",
)
DRESS_CODES = ("Casual", "Formal", "Semi-formal", "Urbano", "Temático")
VIP_OPTIONS = ("No", "1", "2", "Más de 5")
YES_NO = ("Sí", "No")
MIN_AGES = tuple(str(age) for age in range(18, 71))
LINEUP_SLOTS = 3


class EventForm(_Form):
    nombre: Annotated[str, f.min_text(2, "Ingresa el nombre del evento")] = ""
    tipo: Annotated[str, f.min_text(1, "Selecciona el tipo")] = ""
    fecha: Annotated[str, f.min_text(1, "Requerido")] = ""
    horaInicio: Annotated[str, f.min_text(1, "Requerido")] = ""
    horaCierre: Annotated[str, f.min_text(1, "Requerido")] = ""
    capacidad: Annotated[str, f.min_text(1, "Selecciona capacidad")] = ""
    presupuesto: Text = ""
    promotor: Annotated[str, f.min_text(2, "Ingresa el nombre del promotor")] = ""
    telefono: Annotated[str, f.min_text(5, "Teléfono inválido")] = ""
    email: Annotated[str, f.email("Email inválido")] = ""
    desc: Text = ""
    generos: Strings = Field(default_factory=list)
    generosOtro: Text = ""
    edad: Annotated[int, f.coerced_int("Edad inválida", minimum=1)] = 18
    dress_code: Text = ""
    tieneVip: Text = ""
    reservas: Flag = False
    tieneLineup: Flag = False
    djs: Strings = Field(default_factory=list)


class EventEditForm(EventForm):
    nombre: Annotated[str, f.min_text(1, "Requerido")] = ""
    promotor: Annotated[str, f.min_text(1, "Requerido")] = ""
    telefono: Annotated[str, f.min_text(1, "Requerido")] = ""
    horaInicio: Text = ""
    horaCierre: Text = ""
    edad: Annotated[int, f.coerced_int("Edad inválida", minimum=18, maximum=70)] = 18
    dress_code: Annotated[str, f.min_text(1, "Requerido")] = ""
    tieneVip: Text = "No"


# ---------- single-page forms -----------------------------------------------

ROLE_REQUEST_KINDS = ("productor", "club_owner", "ambos")


class RoleRequestForm(_Form):
    nombre: Annotated[str, f.min_text(1, "El nombre es obligatorio")] = ""
    fecha_nacimiento: Text = ""
    calle: Text = ""
    ciudad: Text = ""
    comuna: Text = ""
    pais: Text = ""
    solicitud_tipo: Annotated[str, f.choice(ROLE_REQUEST_KINDS, "Selecciona una opción")] = "productor"


class ProfileForm(_Form):
    nombre: Annotated[str, f.min_text(1, "El nombre es obligatorio")] = ""
    telefono: Text = ""
    rut: Text = ""
    direccion: Text = ""


class ProducerForm(_Form):
    nombre: Annotated[str, f.min_text(1, "El nombre de la productora es obligatorio")] = ""
    telefono: Text = ""
    correo: Annotated[str, f.email("Correo inválido")] = ""
    rut: Text = ""
    rs: Text = ""


# --- Module Notes -----------------------------------------------------------
# Field names stay in the client's vocabulary (Spanish, camelCase where the client
# uses it) so stored documents match what the web and mobile clients read.
