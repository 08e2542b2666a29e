"""
Expense tracker: crop trackers, their transactions, the monthly summary and the PDF report.
"""
import io

from flask import abort, jsonify, request, send_file, current_app
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from ekheti.extensions import db
from ekheti.forms import CropTrackerForm, TransactionForm, form_errors
from ekheti.models.tracker import CropTracker, Transaction
from ekheti.reports import build_expense_report, expense_report_filename, monthly_summary
from ekheti.tracker import bp


def _get_tracker(tracker_id):
    tracker = current_user.crop_trackers.filter_by(id=tracker_id).first()
    if tracker is None:
        abort(404, description='Crop tracker not found')
    return tracker


def _user_transactions():
    """All of the user's transactions, or one tracker's when ?crop_id= is given."""
    query = Transaction.query.join(CropTracker).filter(CropTracker.user_id == current_user.id)
    crop_id = request.args.get('crop_id', type=int)
    if crop_id is not None:
        query = query.filter(Transaction.tracker_id == crop_id)
    return query.all()


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error('Error %s: %s', action, e)
        abort(500, description=f'Could not complete: {action}.')


@bp.route('/crops')
@login_required
def list_trackers():
    trackers = current_user.crop_trackers.order_by(CropTracker.id).all()
    return jsonify({'crops': [t.to_dict() for t in trackers]})


@bp.route('/crops', methods=['POST'])
@login_required
def add_tracker():
    form = CropTrackerForm()
    if not form.validate_on_submit():
        return form_errors(form)
    tracker = CropTracker(user_id=current_user.id, name=form.name.data.strip())
    db.session.add(tracker)
    _commit('adding crop tracker')
    return jsonify(tracker.to_dict()), 201


@bp.route('/crops/<int:tracker_id>', methods=['DELETE'])
@login_required
def delete_tracker(tracker_id):
    tracker = _get_tracker(tracker_id)
    db.session.delete(tracker)
    _commit('deleting crop tracker')
    return jsonify({'deleted': tracker_id})


@bp.route('/crops/<int:tracker_id>/transactions')
@login_required
def list_transactions(tracker_id):
    tracker = _get_tracker(tracker_id)
    transactions = tracker.transactions.order_by(Transaction.date.desc(), Transaction.id.desc()).all()
    return jsonify({'transactions': [t.to_dict() for t in transactions]})


@bp.route('/crops/<int:tracker_id>/transactions', methods=['POST'])
@login_required
def add_transaction(tracker_id):
    tracker = _get_tracker(tracker_id)
    form = TransactionForm()
    if not form.validate_on_submit():
        return form_errors(form)

    transaction = Transaction(
        tracker_id=tracker.id,
        type=form.type.data,
        amount=form.amount.data,
        currency=form.currency.data,
        category=form.category.data.strip(),
        date=form.date.data,
        description=form.description.data or '',
    )
    db.session.add(transaction)
    _commit('adding transaction')
    return jsonify(transaction.to_dict()), 201


@bp.route('/transactions/<int:transaction_id>', methods=['DELETE'])
@login_required
def delete_transaction(transaction_id):
    transaction = Transaction.query.join(CropTracker).filter(
        Transaction.id == transaction_id, CropTracker.user_id == current_user.id).first()
    if transaction is None:
        abort(404, description='Transaction not found')
    db.session.delete(transaction)
    _commit('deleting transaction')
    return jsonify({'deleted': transaction_id})


@bp.route('/summary')
@login_required
def summary():
    return jsonify(monthly_summary(_user_transactions()))


@bp.route('/report.pdf')
@login_required
def expense_report():
    pdf = build_expense_report(_user_transactions(), current_user.display_name)
    return send_file(io.BytesIO(pdf), mimetype='application/pdf', as_attachment=True,
                     download_name=expense_report_filename())
