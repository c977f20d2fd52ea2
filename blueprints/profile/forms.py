"""Profile forms."""

from flask_wtf import FlaskForm
from wtforms import StringField, BooleanField, TextAreaField
from wtforms.validators import Optional, Length


class PreferencesForm(FlaskForm):
    """Travel preferences edited from the profile page."""

    preferred_hotel = StringField('Hotel Preferido', validators=[Optional(), Length(max=200)])
    frequent_changes = BooleanField('Cambio mis reservaciones con frecuencia')
    avoid_locations = TextAreaField('Zonas a Evitar', validators=[Optional(), Length(max=500)])
