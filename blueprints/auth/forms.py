"""
Authentication forms using Flask-WTF.
Provides login and registration (account, company and travel questionnaire)
forms with CSRF protection.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, RadioField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, Optional, Regexp, ValidationError

from utils.validators import validate_rfc as is_valid_rfc


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Correo Electrónico', validators=[
        DataRequired(message='El correo es requerido')
    ])

    password = PasswordField('Contraseña', validators=[
        DataRequired(message='La contraseña es requerida')
    ])


class RegistrationForm(FlaskForm):
    """Account registration with company data and travel questionnaire."""

    # Account
    full_name = StringField('Nombre Completo', validators=[
        DataRequired(message='El nombre es requerido'),
        Length(max=200)
    ])

    email = StringField('Correo Electrónico', validators=[
        DataRequired(message='El correo es requerido'),
        Email(message='El formato del correo electrónico no es válido')
    ])

    password = PasswordField('Contraseña', validators=[
        DataRequired(message='La contraseña es requerida'),
        Length(min=6, message='La contraseña debe tener al menos 6 caracteres')
    ])

    phone = StringField('Teléfono', validators=[
        DataRequired(message='El teléfono es requerido'),
        Regexp(r'^[\d\s\+\-\(\)]{7,20}$', message='Formato de teléfono inválido')
    ])

    # Company
    company_name = StringField('Nombre de la Empresa', validators=[
        DataRequired(message='El nombre de la empresa es requerido'),
        Length(max=200)
    ])

    rfc = StringField('RFC', validators=[Optional()])

    industry = StringField('Industria', validators=[
        DataRequired(message='La industria es requerida')
    ])

    city = StringField('Ciudad', validators=[
        DataRequired(message='La ciudad es requerida')
    ])

    # Travel questionnaire
    preferred_hotel = StringField('Hotel Preferido', validators=[Optional(), Length(max=200)])

    frequent_changes = RadioField('¿Cambias tus reservaciones con frecuencia?', choices=[
        ('yes', 'Sí'),
        ('no', 'No')
    ], default='no')

    avoid_locations = TextAreaField('Zonas a Evitar', validators=[Optional(), Length(max=500)])

    def validate_rfc(self, field):
        if not is_valid_rfc(field.data):
            raise ValidationError('Formato de RFC inválido')

    def account_data(self) -> dict:
        """Account and company fields as a plain dict."""
        return {
            'email': self.email.data.strip().lower(),
            'password': self.password.data,
            'full_name': self.full_name.data.strip(),
            'phone': self.phone.data.strip(),
            'company_name': self.company_name.data.strip(),
            'rfc': (self.rfc.data or '').strip().upper() or None,
            'industry': self.industry.data.strip(),
            'city': self.city.data.strip(),
        }

    def questionnaire_data(self) -> dict:
        """Questionnaire answers as a plain dict."""
        return {
            'preferred_hotel': (self.preferred_hotel.data or '').strip(),
            'frequent_changes': self.frequent_changes.data,
            'avoid_locations': (self.avoid_locations.data or '').strip(),
        }
